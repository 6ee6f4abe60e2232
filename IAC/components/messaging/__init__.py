"""
Messaging components.

Components:
- AmazonMqComponent: Amazon MQ broker (ActiveMQ or RabbitMQ)
"""

from IAC.components.messaging.amazon_mq import AmazonMqComponent, MqOutputs

__all__ = [
    "AmazonMqComponent",
    "MqOutputs",
]

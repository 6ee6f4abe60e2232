"""
Pulumi program entry point for the application stack.

The resources are declared in IAC.stack; see that module for the layer
order and the state-bucket bootstrap mode.
"""

from IAC.stack import main

# Execute
main()

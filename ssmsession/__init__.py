"""
Shell and port-forwarding sessions to managed instances over AWS Systems Manager.

- Starts sessions through the Systems Manager session broker (boto3)
- Hands the session descriptor to the locally installed session-manager-plugin
- Interactive shells, local port forwards and forwards to remote hosts
- Dry-run mode that composes the plugin command without launching it
- YAML configuration with command line overrides
- JSON structured logging with session token masking
"""

__version__ = "1.0.0"

"""
Delete files older than a given age from a remote file-storage account
(Slack by default) through its REST API.
"""

__version__ = "1.0.0"

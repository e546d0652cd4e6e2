"""lsproxy: a multi-language code-intelligence proxy.

Resolves which language backends to activate for a workspace and serves an
HTTP API over it, or writes that API's OpenAPI document to disk.
"""

__version__ = "0.1.0"

"""Core infrastructure: errors, logging, timeouts, HTTP transport, request
execution, streaming and the shared OpenAI-compatible client.

Kept import-light: submodules are imported where they are used so the schema
package can depend on ``base.errors`` without pulling in the clients.
"""

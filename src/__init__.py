"""notion_table_sync package root (flat layout).

Top-level packages live directly under ``src``: ``adapters`` (remote gateways),
``models``, ``parsers`` (decode / format / write-back), ``views`` and ``sync``.
The command-line entrypoint is ``main``.
"""

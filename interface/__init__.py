"""
Interface package: communication protocols for the Qirkat engine.

Modules:
    qtp — Qirkat Text Protocol handler.
          Reads commands from stdin, writes responses to stdout.
          Run as a standalone process with: python -m interface.qtp
"""

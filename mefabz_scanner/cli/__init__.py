"""Unified command-line interface for the invoice scanner.

Usage:
    mefabz-scanner scan <image>... [--prefixes ...] [--suffixes ...] [--json]
    mefabz-scanner parse <ocr.json>...
    mefabz-scanner serve [--host] [--port]
    mefabz-scanner -v ...   (debug logging)
"""

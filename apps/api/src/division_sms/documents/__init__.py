"""
Printable Documents

Server-rendered, self-contained HTML documents that the browser prints:
purchase request, obligation request, approved budget and guarantee letters.
"""

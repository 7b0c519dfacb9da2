"""E-paper image buffers, BMP loading, sensor fusion, UART handshake and control helpers for small embedded projects."""

__version__ = "0.1.0"
"""notechat: grounded question answering over a personal notes corpus."""

__version__ = "0.1.0"

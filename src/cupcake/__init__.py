"""cupcake: configure a cupcake order, track its subtotal and share the summary."""

__version__ = "0.1.0"

"""Paper trading backend with copy-trade fanout."""

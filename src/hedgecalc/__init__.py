"""Option hedging calculator: Black-Scholes premiums, monthly hedge projection, stress scenarios."""

__version__ = "0.1.0"

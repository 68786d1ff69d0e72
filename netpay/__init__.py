"""
Ghana net-pay calculator.

The engine in :mod:`netpay.engine` is pure; the only I/O lives in
:mod:`netpay.rates.provider`, which always degrades to the bundled table.
"""
from __future__ import annotations

__version__ = "0.1.0"

"""clockpay - Payroll from time-clock attendance exports."""

__version__ = "0.3.0"

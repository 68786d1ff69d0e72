from netpay.ui.router import router

__all__ = ["router"]

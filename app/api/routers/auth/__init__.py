from .login import router as login_router

__all__ = ["login_router"]

from .launch import ExecutionContext, kernel
__all__ = ['ExecutionContext', 'kernel']

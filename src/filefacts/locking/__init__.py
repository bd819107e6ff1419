from .probe import LockState, is_locked, probe_lock

__all__ = ['LockState', 'is_locked', 'probe_lock']

import threading


class Singleton(type):
    _instances: dict[type, object] = {}
    _lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        instance = cls._instances.get(cls)
        if instance is not None:
            return instance
        with cls._lock:
            if cls not in cls._instances:
                cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]

    def forget(cls):
        with cls._lock:
            cls._instances.pop(cls, None)

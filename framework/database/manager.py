from .mysql_driver import MySQLDriver

class DatabaseManager:
    _instance = None

    def __init__(self, settings):
        self.mysql = MySQLDriver(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )

    @classmethod
    def get_instance(cls, settings=None):
        if cls._instance is None:
            if settings is None:
                from framework.config import settings as app_settings
                settings = app_settings
            cls._instance = cls(settings)
        return cls._instance


async def get_db():
    """Dependency: database session for the current request."""
    manager = DatabaseManager.get_instance()
    async for session in manager.mysql.get_session():
        yield session

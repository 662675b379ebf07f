class MoviesError(Exception):
    """Базовая ошибка доменного слоя."""
    error = "movies_error"

    def __init__(self, message: str | None = None):
        super().__init__(message)
        self.message = message

    def as_detail(self) -> dict:
        return {"error": self.error, "message": self.message}


class InvalidArgument(MoviesError):
    """
    Некорректные параметры запроса (страница, размер страницы, сортировка).
    Бросается до любого обращения к БД.
    """
    error = "invalid_argument"


class StoreUnavailable(MoviesError):
    """Запрос к БД упал или не дождался ответа."""
    error = "store_unavailable"

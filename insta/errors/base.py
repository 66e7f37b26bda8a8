class InstaError(Exception):
    kind = 'error'

    def __init__(self, message: str, services: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.services: list[str] = list(services or [])

    def __str__(self):
        return self.message

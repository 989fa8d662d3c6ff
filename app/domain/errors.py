# app/domain/errors.py


class CatalogError(Exception):
    """Bazowy wyjatek dla operacji na katalogu i koszykach."""


class NotFound(CatalogError):
    pass


class AlreadyCheckedOut(CatalogError):
    def __init__(self, cart_id: int | None = None):
        self.cart_id = cart_id
        super().__init__("Cart already checked out!")


class InvalidArgument(CatalogError):
    pass


class PersistenceError(CatalogError):
    """Blad bazy / sterownika, ktorego nie da sie lepiej sklasyfikowac."""


class BackendUnavailable(PersistenceError):
    """Baza nieosiagalna (polaczenie, timeout) - to NIE jest 'nie znaleziono'."""

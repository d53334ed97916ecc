class PBError(Exception):
    """Error hablando con PocketBase (HTTP no OK o respuesta incompleta)."""


class NodeTraversalAbort(Exception):
    """Lo lanza un hook del visitor para abandonar el subárbol del nodo actual.

    El traverser deja de procesar el nodo cuyo hook la lanzó y sigue con sus
    hermanos y ancestros. Nunca llega a quien llamó a ``traverse``.
    """


class TraversalException(Exception):
    """Cualquier otro fallo durante un recorrido; envuelve el error original."""

    def __init__(self, cause: BaseException):
        super().__init__(f"Traversal failed: {cause!r}")
        self.cause = cause


class FormatterError(Exception):
    pass

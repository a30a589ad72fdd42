"""Second of two modules declaring a class named ``Options``."""


class Options:
    """Options of the beta flavour."""

"""simbook - SIM card phonebook access with name limit discovery."""

__version__ = "1.0.0"

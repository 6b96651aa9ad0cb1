"""sailsgen - Generate Sails.js models from a MySQL catalog."""

__version__ = "0.3.0"

"""ngmodernize: migrate legacy Angular projects to modern idioms."""

__version__ = "0.3.0"

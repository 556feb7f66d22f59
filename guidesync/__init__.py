"""guidesync: keep local Markdown articles and help-center HTML interchangeable."""

__version__ = "0.1.0"

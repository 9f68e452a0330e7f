"""Fast Dashboard manager.

Scaffolds Go + Fyne dashboard projects and extends a generated project with
new pages, widgets, services and data models.
"""

__version__ = "0.1.0"

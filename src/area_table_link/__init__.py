"""Exchange area tables between AutoCAD drawings and Excel workbooks."""

__version__ = "0.1.0"

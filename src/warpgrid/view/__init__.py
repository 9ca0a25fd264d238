"""
The VIEW layer adapts the model to the Qt (PySide6) value types used by host
applications.
"""

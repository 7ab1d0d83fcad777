"""
The VIEW layer turns an ExperimentSession into something drawable.
`render` is Qt-free; `main_window` is the PySide6/pyqtgraph front-end.
"""

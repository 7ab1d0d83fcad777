"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or the plotting widgets (pyqtgraph).
It deals with the hidden area profile, random streams and the readings log.
"""

"""
The MODEL layer contains pure data structures and file formats.
It has NO knowledge of the GUI (Qt).
It deals with Parameters, Data Sets, Graphs and I/O.
"""

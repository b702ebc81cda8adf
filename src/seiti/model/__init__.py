"""
The MODEL layer contains pure data structures and board logic.
It has NO knowledge of the GUI (Qt) or the board service transport.
It deals with snapshots, coordinates, moves and their projection to markers.
"""

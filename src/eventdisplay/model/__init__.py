"""
The MODEL layer contains pure data structures and the scene generation logic.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with Dimensions, Generators, the Cell lattice and the Scene lifecycle.
"""

"""
myCORE - habit, task and project tracking backend
"""
__version__ = "0.1.0"

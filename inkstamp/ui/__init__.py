"""
User interface: main window, page canvas and toolbars.
"""

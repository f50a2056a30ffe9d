"""tkinter front-end for the text transformer."""

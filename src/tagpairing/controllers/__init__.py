"""Tournament controllers: the command surface and the engines behind it."""

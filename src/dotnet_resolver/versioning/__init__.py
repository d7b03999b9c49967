"""SDK version codec, roll-forward translation, catalog and alias resolution."""

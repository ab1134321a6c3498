"""Action handlers extracted from PaperPicker, grouped by concern."""

from .panel import PanelDataset, load_panel, select_column

__all__ = [
    "PanelDataset",
    "load_panel",
    "select_column",
]

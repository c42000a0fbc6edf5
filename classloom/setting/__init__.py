from .setting import (
    ExtractionSettings,
    GeneratorSettings,
    InferenceSettings,
    LayoutSettings,
    Settings,
    get_settings,
    load_settings,
)

__all__ = [
    "ExtractionSettings",
    "GeneratorSettings",
    "InferenceSettings",
    "LayoutSettings",
    "Settings",
    "get_settings",
    "load_settings",
]

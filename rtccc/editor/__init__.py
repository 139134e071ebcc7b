"""Editing session: the mutable plan behind the canvas, re-checked on every edit."""

from rtccc.editor.session import FloorplanSession
from rtccc.editor.templates import ELEMENT_DEFAULTS, demo_scenario, new_element

__all__ = ["ELEMENT_DEFAULTS", "FloorplanSession", "demo_scenario", "new_element"]

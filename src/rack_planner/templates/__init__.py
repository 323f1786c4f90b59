"""Rack template library and registry."""

from rack_planner.templates.registry import TemplateRegistry

__all__ = ["TemplateRegistry"]

from .html_renderer import render

__all__ = ["render"]

from txgraph.render.sink import ElementListSink, RenderSink, to_elements

__all__ = ["ElementListSink", "RenderSink", "to_elements"]

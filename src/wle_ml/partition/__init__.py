from .splitter import stratified_split

__all__ = ["stratified_split"]

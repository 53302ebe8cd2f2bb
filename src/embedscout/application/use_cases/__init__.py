from .resolve_streams import ResolveStreamsUseCase, assemble_results

__all__ = [
    "ResolveStreamsUseCase",
    "assemble_results",
]

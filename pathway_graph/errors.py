from __future__ import annotations
"""Terminal errors raised by a graph build."""


class PathwayFetchError(RuntimeError):
    """Fetching or parsing one of the pathway sources failed; the build is aborted."""

    def __init__(self, source: str, pathway_id: str, message: str):
        super().__init__(f"{source} failed for {pathway_id}: {message}")
        self.source = source
        self.pathway_id = pathway_id


class StaleBuildError(RuntimeError):
    """A newer build was started before this one finished; its result is discarded."""

    def __init__(self, pathway_id: str, generation: int, current: int):
        super().__init__(f"build {generation} for {pathway_id} superseded by build {current}")
        self.pathway_id = pathway_id
        self.generation = generation
        self.current = current


__all__ = ['PathwayFetchError', 'StaleBuildError']

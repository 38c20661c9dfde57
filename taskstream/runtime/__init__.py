"""Runtime package: settings loading, logging and dependency construction."""

__all__: list[str] = []

from pathlib import Path, PurePosixPath

from hanzidb.errors import PathResolutionError
from hanzidb.settings import Settings, settings as default_settings


def resolve_path(logical_name: str, settings: Settings | None = None) -> Path:
    """
    Maps a logical resource name ("hanzi.db", "data/dictionary.txt") to a path
    for the current runtime. The file itself does not have to exist yet.
    """
    settings = settings or default_settings

    relative = PurePosixPath(logical_name or "")
    if not logical_name or relative.is_absolute() or ".." in relative.parts:
        raise PathResolutionError("resolve_path", f"invalid resource name {logical_name!r}")

    if settings.runtime == "resource":
        if settings.resource_dir is None:
            raise PathResolutionError(
                "resolve_path",
                f"no resource directory configured for {logical_name!r}",
            )
        base = settings.resource_dir
    else:
        base = settings.project_root

    return Path(base).joinpath(*relative.parts).resolve()


def data_file(name: str, settings: Settings | None = None) -> Path:
    settings = settings or default_settings
    return resolve_path(f"{settings.data_dir}/{name}", settings)


def database_path(settings: Settings | None = None) -> Path:
    settings = settings or default_settings
    return resolve_path(settings.db_name, settings)

from pathlib import Path, PurePosixPath

from starlette.concurrency import run_in_threadpool

from brandkeeper.settings import Settings


class LocalStorage:
    """Writes uploads below ``root`` and serves them from ``base_url``."""

    def __init__(self, root: str | Path, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalStorage":
        return cls(settings.MEDIA_ROOT, settings.MEDIA_URL)

    def _resolve(self, relative_path: str) -> Path:
        target = (self.root / relative_path).resolve()
        if self.root.resolve() not in target.parents:
            raise ValueError(f"Path escapes media root: {relative_path}")
        return target

    def url_for(self, relative_path: str) -> str:
        return f"{self.base_url}/{PurePosixPath(relative_path)}"

    def path_from_url(self, url: str | None) -> str | None:
        if not url:
            return None
        prefix = f"{self.base_url}/"
        index = url.find(prefix)
        if index == -1:
            return None
        return url[index + len(prefix):] or None

    def _write(self, relative_path: str, data: bytes) -> None:
        target = self._resolve(relative_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def _remove(self, relative_path: str) -> bool:
        target = self._resolve(relative_path)
        if not target.exists():
            return False
        target.unlink()
        return True

    async def save(self, relative_path: str, data: bytes) -> str:
        await run_in_threadpool(self._write, relative_path, data)
        return self.url_for(relative_path)

    async def delete(self, relative_path: str) -> bool:
        return await run_in_threadpool(self._remove, relative_path)

import logging
import os
import re
import tempfile
import zipfile
from pathlib import Path
from typing import Dict, Union

from .errors import ArchiveWriteFailed
from .models import SOURCE_KEY, ContractTree

logger = logging.getLogger(__name__)

# JSON allows escaped lone surrogates, UTF-8 cannot carry them.
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def archive_name(contract_name: str, address: str) -> str:
    return f"{contract_name}_{address}.zip"


def _encode_source(content: str) -> bytes:
    return _LONE_SURROGATE.sub("\ufffd", content).encode("utf-8")


class ZipArchiveWriter:
    """Write a ContractTree to ``<output_dir>/<name>_<address>.zip``.

    The archive is assembled in a temporary file next to the target and
    renamed into place only once every entry has been written.
    """

    def __init__(self, output_dir: Union[str, Path]) -> None:
        self.output_dir = Path(output_dir)

    def write(self, contract_name: str, address: str, tree: ContractTree) -> Path:
        target = self.output_dir / archive_name(contract_name, address)
        if target.resolve().parent != self.output_dir.resolve():
            raise ArchiveWriteFailed(f"Archive name escapes output directory {self.output_dir}: {target}", str(target))

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".partial-", suffix=".zip", dir=self.output_dir)
            os.close(fd)
        except OSError as exc:
            raise ArchiveWriteFailed(f"Cannot write to output directory {self.output_dir}: {exc}", str(target)) from exc

        try:
            with zipfile.ZipFile(tmp_name, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                for filename, fields in tree.items():
                    archive.writestr(filename, _encode_source(fields[SOURCE_KEY]))
            os.replace(tmp_name, target)
        except (OSError, KeyError, ValueError, zipfile.BadZipFile) as exc:
            _discard(tmp_name)
            raise ArchiveWriteFailed(f"Failed to write archive {target}: {exc!r}", str(target)) from exc

        logger.info("wrote %d file(s) to %s", len(tree), target)
        return target


def read_archive(path: Union[str, Path]) -> Dict[str, str]:
    with zipfile.ZipFile(path) as archive:
        return {name: archive.read(name).decode("utf-8") for name in archive.namelist()}


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass

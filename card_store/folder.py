"""
card_store/folder.py — magazyn kart oparty na strukturze katalogów projektu.

Układ projektu::

    <projekt>/
      .cards/local/calculations/*.lp              lokalne moduły reguł
      .cards/modules/<moduł>/calculations/*.lp    moduły importowane
      cardroot/<klucz>/index.json                 metadane karty (obiekt JSON)
      cardroot/<klucz>/c/<klucz dziecka>/...      karty potomne
      .calc/                                      folder obliczeń (generowany)

Korzeń projektu to najbliższy folder nadrzędny zawierający jednocześnie
.cards oraz cardroot.
"""

from __future__ import annotations

import json
import pathlib
from collections.abc import Iterable

from data_model import Card, ModuleRef, flatten_cards

PROJECT_MARKER     = ".cards"
CARD_ROOT          = "cardroot"
CHILDREN_FOLDER    = "c"
METADATA_FILE      = "index.json"
CALCULATION_FOLDER = ".calc"
CALCULATIONS       = "calculations"


def find_project_root(path: pathlib.Path | str) -> pathlib.Path | None:
    """Zwraca korzeń projektu zawierającego ścieżkę albo None."""
    start = pathlib.Path(path).absolute()
    for candidate in (start, *start.parents):
        if (candidate / PROJECT_MARKER).is_dir() and (candidate / CARD_ROOT).is_dir():
            return candidate
    return None


class FolderProject:
    """
    Projekt kart czytany bezpośrednio z dysku.

    Nic nie jest cache'owane; każde wywołanie odzwierciedla bieżący stan
    katalogów, więc karty dodane lub usunięte przez edytor są od razu widoczne.
    """

    def __init__(self, base_path: pathlib.Path | str) -> None:
        self.base_path          = pathlib.Path(base_path)
        self.card_root          = self.base_path / CARD_ROOT
        self.calculation_folder = self.base_path / CALCULATION_FOLDER

    def __repr__(self) -> str:
        return f"FolderProject({str(self.base_path)!r})"

    # ------------------------------------------------------------------

    def cards(self) -> list[Card]:
        """Wszystkie karty projektu (spłaszczone, pre-order, bez children)."""
        return flatten_cards(self._read_level(self.card_root))

    def find_card(self, key: str) -> Card | None:
        """Karta o podanym kluczu razem z poddrzewem albo None."""
        if not key:
            return None
        return self.find_cards([key]).get(key)

    def find_cards(self, keys: Iterable[str]) -> dict[str, Card]:
        """
        Karty o podanych kluczach (z poddrzewami) po jednym przejściu drzewa.

        Nieznane klucze są pomijane. Przy powtórzonym kluczu wygrywa pierwszy
        folder w porządku ścieżek.
        """
        wanted = {k for k in keys if k}
        if not wanted:
            return {}
        folders = self._card_folders()
        return {
            key: self._read_card(folders[key])
            for key in sorted(wanted)
            if key in folders
        }

    def calculations(self) -> list[ModuleRef]:
        """Pliki reguł: najpierw lokalne, potem moduły w kolejności alfabetycznej."""
        refs: list[ModuleRef] = []
        local = self.base_path / PROJECT_MARKER / "local" / CALCULATIONS
        refs.extend(self._module_files("local", local))

        modules = self.base_path / PROJECT_MARKER / "modules"
        if modules.is_dir():
            for module in sorted(p for p in modules.iterdir() if p.is_dir()):
                refs.extend(self._module_files(module.name, module / CALCULATIONS))
        return refs

    # ------------------------------------------------------------------

    def _card_folders(self) -> dict[str, pathlib.Path]:
        folders: dict[str, pathlib.Path] = {}
        for index in sorted(self.card_root.rglob(METADATA_FILE)):
            folders.setdefault(index.parent.name, index.parent)
        return folders

    def _module_files(self, prefix: str, folder: pathlib.Path) -> list[ModuleRef]:
        if not folder.is_dir():
            return []
        return [
            ModuleRef(name=f"{prefix}/{f.name}", path=folder)
            for f in sorted(folder.glob("*.lp"))
        ]

    def _read_level(self, folder: pathlib.Path) -> list[Card]:
        if not folder.is_dir():
            return []
        return [
            self._read_card(entry)
            for entry in sorted(folder.iterdir())
            if entry.is_dir() and (entry / METADATA_FILE).is_file()
        ]

    def _read_card(self, folder: pathlib.Path) -> Card:
        raw = json.loads((folder / METADATA_FILE).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"Metadane karty nie są obiektem JSON: {folder / METADATA_FILE}")
        return Card(
            key=folder.name,
            path=folder,
            metadata=raw,
            children=self._read_level(folder / CHILDREN_FOLDER),
        )


def write_card(
    parent_folder: pathlib.Path,
    key:           str,
    metadata:      dict,
) -> pathlib.Path:
    """
    Tworzy (lub nadpisuje) kartę w podanym folderze nadrzędnym.

    parent_folder to cardroot albo folder innej karty; w tym drugim
    przypadku karta trafia do jej podfolderu c/.
    """
    base = parent_folder if parent_folder.name == CARD_ROOT else parent_folder / CHILDREN_FOLDER
    folder = base / key
    folder.mkdir(parents=True, exist_ok=True)
    (folder / METADATA_FILE).write_text(
        json.dumps(metadata, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return folder

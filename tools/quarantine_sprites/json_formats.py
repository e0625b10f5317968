# -*- coding: utf-8 -*-
# vim: set fenc=utf-8 ai ts=4 sw=4 sts=4 et:


import json
import os.path
import xml.etree.ElementTree
from typing import Any, Final, Generator, NamedTuple, NoReturn, Optional, Type, TypeVar, Union

from .errors import FileError, ConfigError


Name = str
Filename = str


class JsonError(FileError):
    pass


class _Helper:
    """
    A helper class to help parse the output of `json.load()` into structured data.

    This class will also recursively track the position within the `json.load()` output to improve error messages.
    """

    # _Helper class or subclass of _Helper
    _Self = TypeVar("_Self", bound="_Helper")

    _T = TypeVar("_T")

    def __init__(self, d: dict[str, Any], *path: str):
        if not isinstance(d, dict):
            raise JsonError("Expected a dict", path)

        self.__dict: Final = d
        self.__path: Final = path

    def _raise_error(self, e: Union[str, Exception], *location: str) -> NoReturn:
        if isinstance(e, Exception):
            e = f"{ type(e).__name__ }: { e }"
        raise JsonError(e, self.__path + location) from None

    def _raise_missing_field_error(self, key: str, *location: str) -> NoReturn:
        raise JsonError(f"Missing JSON field: { key }", self.__path + location)

    def _get(self, key: str, _type: Type[_T]) -> _T:
        assert _type != dict

        v = self.__dict.get(key)
        if v is None:
            self._raise_missing_field_error(key)
        if not isinstance(v, _type):
            self._raise_error(f"Expected a { _type.__name__ }", key)
        return v

    def _optional_get(self, key: str, _type: Type[_T]) -> Optional[_T]:
        assert _type != dict

        v = self.__dict.get(key)
        if v is None:
            return None
        if not isinstance(v, _type):
            self._raise_error(f"Expected a { _type.__name__ }", key)
        return v

    def iterate_optional_list_of_dicts(self: _Self, key: str) -> Generator[_Self, None, None]:
        cls = type(self)

        l = self._optional_get(key, list)
        if l is None:
            return

        for i, item in enumerate(l):
            if not isinstance(item, dict):
                self._raise_error("Expected a dict", key, str(i))

            yield cls(item, *self.__path, key, str(i))

    # `self.__dict` MUST NOT be accessed below this line
    # --------------------------------------------------

    def get_string(self, key: str) -> str:
        return self._get(key, str)

    def get_optional_string(self, key: str) -> Optional[str]:
        return self._optional_get(key, str)

    def get_filename(self, key: str) -> Filename:
        s = self._get(key, str)
        if not s:
            self._raise_error("Expected a filename", key)
        return s

    def get_optional_bool(self, key: str, default: bool) -> bool:
        v = self._optional_get(key, bool)
        if v is None:
            return default
        return v

    def get_string_list(self, key: str) -> list[str]:
        l = self._get(key, list)

        for i, s in enumerate(l):
            if not isinstance(s, str):
                self._raise_error("Expected a string", key, str(i))
        return l


def _load_json_file(filename: Filename, cls: Type[_Helper._Self]) -> _Helper._Self:
    with open(filename, "r") as fp:
        try:
            j = json.load(fp)
        except json.JSONDecodeError as e:
            raise JsonError(f"Invalid JSON: { e }", (os.path.basename(filename),)) from None

    return cls(j, os.path.basename(filename))


# config.json
# ===========


class PaletteMapping(NamedTuple):
    # An empty `source` falls back to the default palette
    source: Name
    sprites: list[Name]


class Config(NamedTuple):
    installation_directory: Filename
    output_directory: Filename
    output_file_type: str
    default_palette: Name
    background_transparent: bool
    palette_mappings: list[PaletteMapping]


def _resolve_directory(config_filename: Filename, path: Filename) -> Filename:
    return os.path.join(os.path.dirname(os.path.abspath(config_filename)), os.path.expanduser(path))


def load_config_json(filename: Filename) -> Config:
    jh = _load_json_file(filename, _Helper)

    return Config(
        installation_directory=_resolve_directory(filename, jh.get_filename("installation_directory")),
        output_directory=_resolve_directory(filename, jh.get_filename("output_directory")),
        output_file_type=jh.get_string("output_file_type"),
        default_palette=jh.get_string("default_palette"),
        background_transparent=jh.get_optional_bool("background_transparent", False),
        palette_mappings=[
            PaletteMapping(
                source=m.get_optional_string("source") or "",
                sprites=m.get_string_list("sprites"),
            )
            for m in jh.iterate_optional_list_of_dicts("palette_mappings")
        ],
    )


# Config.xml
# ==========
#
# The layout written by the original Windows tool's XML serializer


def _xml_text(tag: xml.etree.ElementTree.Element, name: str, error_list: list[str]) -> str:
    child = tag.find(name)
    if child is None:
        error_list.append(f"<{ tag.tag }>: Missing element <{ name }>")
        return ""
    return (child.text or "").strip()


def _xml_filename(tag: xml.etree.ElementTree.Element, name: str, error_list: list[str]) -> Filename:
    child = tag.find(name)
    if child is None:
        error_list.append(f"<{ tag.tag }>: Missing element <{ name }>")
        return ""

    s = (child.text or "").strip()
    if not s:
        error_list.append(f"<{ tag.tag } { name }>: Expected a filename")
    return s


def _xml_bool(tag: xml.etree.ElementTree.Element, name: str, error_list: list[str]) -> bool:
    child = tag.find(name)
    if child is None:
        return False

    s = (child.text or "").strip().lower()
    if s == "true":
        return True
    elif s == "false":
        return False
    else:
        error_list.append(f"<{ tag.tag } { name }>: Expected true or false: { s }")
        return False


def _parse_xml_palette_tag(tag: xml.etree.ElementTree.Element, error_list: list[str]) -> PaletteMapping:
    source = tag.attrib.get("src")
    if source is None:
        src_tag = tag.find("src")
        source = (src_tag.text or "") if src_tag is not None else ""

    sprites = list()
    sprites_tag = tag.find("Sprites")
    if sprites_tag is not None:
        for s in sprites_tag.findall("string"):
            if s.text:
                sprites.append(s.text.strip())
            else:
                error_list.append(f"<Palette src={ source }>: Empty sprite name")

    return PaletteMapping(source.strip(), sprites)


def load_config_xml(filename: Filename) -> Config:
    basename: Final = os.path.basename(filename)

    try:
        root = xml.etree.ElementTree.parse(filename).getroot()
    except xml.etree.ElementTree.ParseError as e:
        raise ConfigError(f"Error loading { basename }", [str(e)])

    error_list: list[str] = list()

    if root.tag != "Config":
        raise ConfigError(f"Error loading { basename }", [f"Expected a <Config> root element, got <{ root.tag }>"])

    installation_directory = _xml_filename(root, "QuarantineInstallationFolder", error_list)
    output_directory = _xml_filename(root, "OutputFolder", error_list)
    output_file_type = _xml_text(root, "OutputFileType", error_list)
    default_palette = _xml_text(root, "DefaultPalette", error_list)
    background_transparent = _xml_bool(root, "BackgroundTransparent", error_list)

    palette_mappings = list()
    mappings_tag = root.find("PaletteMappings")
    if mappings_tag is not None:
        for p in mappings_tag.findall("Palette"):
            palette_mappings.append(_parse_xml_palette_tag(p, error_list))

    if error_list:
        raise ConfigError(f"Error loading { basename }", error_list)

    return Config(
        installation_directory=_resolve_directory(filename, installation_directory),
        output_directory=_resolve_directory(filename, output_directory),
        output_file_type=output_file_type,
        default_palette=default_palette,
        background_transparent=background_transparent,
        palette_mappings=palette_mappings,
    )


def load_config(filename: Filename) -> Config:
    if os.path.splitext(filename)[1].lower() == ".xml":
        return load_config_xml(filename)
    else:
        return load_config_json(filename)

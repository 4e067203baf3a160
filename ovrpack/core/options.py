"""Package options and their validation.

Options arrive as the JSON document PWABuilder posts for a Meta Quest
package. They are validated once here; everything downstream takes a
``PackageOptions`` and may assume its invariants.

Usage:
    match load_options(Path("options.json")):
        case Ok(options):
            print(options.package_id)
        case Err(error):
            print(f"{error.field}: {error.message}")
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_raw_str, get_str, get_table

__all__ = [
    "OptionsError",
    "PackageOptions",
    "SigningKey",
    "load_options",
    "parse_options",
]

_PACKAGE_ID_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*(\.[A-Za-z][A-Za-z0-9_]*)+$")


@dataclass(frozen=True, slots=True)
class OptionsError:
    """Invalid package options."""

    message: str
    field: str | None = None


@dataclass(frozen=True, slots=True)
class SigningKey:
    """Signing key material for one package request.

    Attributes:
        keystore_file: Base64-encoded keystore bytes. Blank means no key.
        store_password: Keystore password.
        alias: Key alias inside the keystore.
        password: Key password.
        skip_signing: Produce an unsigned APK. Wins over every other field.
    """

    keystore_file: str = ""
    store_password: str = ""
    alias: str = ""
    password: str = ""
    skip_signing: bool = False

    @property
    def has_keystore(self) -> bool:
        return bool(self.keystore_file.strip())

    def __repr__(self) -> str:
        return (
            f"SigningKey(alias={self.alias!r}, has_keystore={self.has_keystore}, "
            f"skip_signing={self.skip_signing})"
        )


@dataclass(frozen=True, slots=True)
class PackageOptions:
    """Validated options for one Meta Quest package."""

    package_id: str
    name: str
    manifest_uri: str
    manifest: StrDict
    signing_key: SigningKey | None = None


def _is_absolute_http_url(value: str) -> bool:
    parts = urlsplit(value)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def _parse_signing_key(data: StrDict) -> Result[SigningKey, OptionsError]:
    key = SigningKey(
        keystore_file=get_raw_str(data, "keyStoreFile"),
        store_password=get_raw_str(data, "storePassword"),
        alias=get_raw_str(data, "alias"),
        password=get_raw_str(data, "password"),
        skip_signing=get_bool(data, "skipSigning"),
    )
    if key.skip_signing or not key.has_keystore:
        return Ok(key)

    for field_name, value in (
        ("storePassword", key.store_password),
        ("alias", key.alias),
        ("password", key.password),
    ):
        if not value.strip():
            return Err(
                OptionsError(
                    f"{field_name} is required when a key store file is supplied",
                    field=f"signingKey.{field_name}",
                )
            )
    return Ok(key)


def parse_options(data: Mapping[str, object]) -> Result[PackageOptions, OptionsError]:
    """Validate a parsed options document.

    Args:
        data: The decoded JSON object (camelCase keys).

    Returns:
        Ok(PackageOptions) on success, Err(OptionsError) naming the bad field
    """
    package_id = get_str(data, "packageId")
    if package_id is None:
        return Err(OptionsError("packageId is required", field="packageId"))
    if not _PACKAGE_ID_RE.match(package_id):
        return Err(
            OptionsError(
                f"packageId must look like a Java package name (e.g. com.example.app): "
                f"{package_id}",
                field="packageId",
            )
        )

    name = get_str(data, "name")
    if name is None:
        return Err(OptionsError("name is required", field="name"))

    manifest_uri = get_str(data, "manifestUri")
    if manifest_uri is None:
        return Err(OptionsError("manifestUri is required", field="manifestUri"))
    if not _is_absolute_http_url(manifest_uri):
        return Err(
            OptionsError(
                f"manifestUri must be an absolute http(s) URL: {manifest_uri}",
                field="manifestUri",
            )
        )

    manifest = get_table(data, "manifest")
    if manifest is None:
        return Err(OptionsError("manifest must be a JSON object", field="manifest"))

    signing_key: SigningKey | None = None
    if data.get("signingKey") is not None:
        key_data = get_table(data, "signingKey")
        if key_data is None:
            return Err(OptionsError("signingKey must be a JSON object", field="signingKey"))
        match _parse_signing_key(key_data):
            case Err() as err:
                return err
            case Ok(key):
                signing_key = key

    return Ok(
        PackageOptions(
            package_id=package_id,
            name=name,
            manifest_uri=manifest_uri,
            manifest=manifest,
            signing_key=signing_key,
        )
    )


def load_options(path: Path) -> Result[PackageOptions, OptionsError]:
    """Read and validate an options JSON file."""
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(OptionsError(f"Options file not found: {path}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(OptionsError(f"Error reading options: {e}"))
    except json.JSONDecodeError as e:
        return Err(OptionsError(f"Invalid JSON in {path}: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(OptionsError("Options root must be a JSON object"))
    return parse_options(data)

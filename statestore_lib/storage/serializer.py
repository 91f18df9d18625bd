from typing import Any, Protocol
import base64
import json
import os
import yaml


class Serializer(Protocol):
    """Serialize/deserialize a store document to bytes.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    `extension` names the document file suffix used by file backends.
    """

    extension: str

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Default serializer using JSON (text).

    Values must be JSON-representable; anything else raises `TypeError`
    from `json.dumps`.
    """

    extension = ".json"

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, allow_nan=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class YAMLSerializer:
    """Serializer using YAML (text), handy when documents are edited by hand."""

    extension = ".yaml"

    def dump(self, value: Any) -> bytes:
        return yaml.safe_dump(value, sort_keys=False, allow_unicode=True).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return yaml.safe_load(data.decode("utf-8"))


class EncryptedSerializer:
    """Serializer that encrypts documents using Fernet (symmetric, authenticated).

    Provide either `key` (a Fernet key) or `password`. In password mode
    every payload carries its own random salt and PBKDF2 iteration count
    so the loader can derive the key again. The plaintext is produced by
    `base_serializer` (JSON by default).
    """

    extension = ".enc"

    def __init__(
        self,
        *,
        key: bytes | None = None,
        password: str | None = None,
        iterations: int = 390000,
        base_serializer: Serializer | None = None,
    ) -> None:
        if key is None and password is None:
            raise ValueError("EncryptedSerializer requires either `key` or `password`")
        self._key = key
        self._password = password
        self._iterations = iterations
        self.base_serializer = base_serializer or JSONSerializer()

    def _derive_key(self, password: str, salt: bytes, iterations: int) -> bytes:
        from cryptography.hazmat.primitives import hashes
        from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

        kdf = PBKDF2HMAC(algorithm=hashes.SHA256(), length=32, salt=salt, iterations=iterations)
        return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))

    def dump(self, value: Any) -> bytes:
        from cryptography.fernet import Fernet

        inner = self.base_serializer.dump(value)
        frame: dict[str, Any] = {"v": 1}
        if self._password is not None:
            salt = os.urandom(16)
            fernet = Fernet(self._derive_key(self._password, salt, self._iterations))
            frame.update(
                mode="password",
                kdf="pbkdf2",
                iterations=self._iterations,
                salt=base64.urlsafe_b64encode(salt).decode("ascii"),
            )
        else:
            fernet = Fernet(self._key)  # type: ignore[arg-type]
            frame["mode"] = "key"
        frame["ct"] = base64.urlsafe_b64encode(fernet.encrypt(inner)).decode("ascii")
        return json.dumps(frame).encode("utf-8")

    def load(self, data: bytes) -> Any:
        from cryptography.fernet import Fernet

        frame = json.loads(data.decode("utf-8"))
        mode = frame.get("mode")
        if mode == "password":
            if self._password is None:
                raise ValueError("serializer was not configured with a password")
            salt = base64.urlsafe_b64decode(frame["salt"].encode("ascii"))
            fernet = Fernet(self._derive_key(self._password, salt, frame.get("iterations", self._iterations)))
        elif mode == "key":
            if self._key is None:
                raise ValueError("serializer was not configured with a key")
            fernet = Fernet(self._key)
        else:
            raise ValueError("unknown frame format")
        ct = base64.urlsafe_b64decode(frame["ct"].encode("ascii"))
        return self.base_serializer.load(fernet.decrypt(ct))


SERIALIZERS = ("json", "yaml", "encrypted")


def create_serializer(name: str = "json", *, password: str | None = None, key: bytes | None = None) -> Serializer:
    """Return a serializer instance for `name` (one of SERIALIZERS)."""
    if name == "json":
        return JSONSerializer()
    if name == "yaml":
        return YAMLSerializer()
    if name == "encrypted":
        return EncryptedSerializer(key=key, password=password)
    raise ValueError(f"Unknown serializer: {name!r}")

"""High-level load/save API for CXMF models.

The public functions never raise :class:`CxmfError`: failures are written to
the optional ``Logger`` collaborator and reported as ``None`` / ``False``.
``encode_model`` and ``decode_model`` are the strict variants that raise.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from .codec.compression import (
    CompressionLevel,
    compress_payload,
    decompress_payload,
)
from .codec.constants import (
    HEADER_SIZE,
    IMPORT_EXTENSIONS,
    MAGIC,
    MAX_PAYLOAD_SIZE,
    PREAMBLE_SIZE,
)
from .codec.errors import (
    E_EXTENSION,
    E_SIZE,
    E_VALIDATION,
    CxmfError,
    ImporterError,
    ImporterFault,
    ValidationFailed,
    format_error,
    io_error,
)
from .codec.header import Header, pack_preamble, read_preamble
from .codec.model_codec import deserialize_model, serialize_model
from .codec.version import decode_version
from .config import CodecOptions
from .importer import ImportFunc, get_importer
from .logging import Logger, get_logger, send_log_message
from .model.entities import Model
from .model.validator import validate_model
from .reporting import DecodeStage, Reporter, get_reporter
from .utils.io import BinaryOutputStream, OutputStream, read_file_bytes

__all__ = [
    "load_from_file",
    "load_from_memory",
    "save_to_file",
    "save_to_stream",
    "encode_model",
    "decode_model",
    "report_failure",
    "model_summary",
    "report_model",
]


def report_failure(logger: Logger | None, error: CxmfError) -> None:
    send_log_message(logger, error.message)
    get_logger().debug("%s", error)


def _resolve_level(
    level: CompressionLevel | str | None, options: CodecOptions
) -> CompressionLevel:
    if level is None:
        return options.compression
    return CompressionLevel.parse(level)


def encode_model(
    model: Model,
    level: CompressionLevel | str | None = None,
    *,
    options: CodecOptions | None = None,
) -> bytes:
    """Encode ``model`` into a complete container (header, tag, payload)."""
    options = options or CodecOptions()
    if options.validate_on_save:
        issues = validate_model(model)
        if issues:
            raise ValidationFailed(
                code=E_VALIDATION,
                message=f"Model validation failed: {issues[0].path}: {issues[0].message}",
                context={"issues": [i.to_dict() for i in issues]},
            )
    payload = serialize_model(model, options.byte_order)
    if len(payload) >= MAX_PAYLOAD_SIZE:
        raise format_error(E_SIZE, "Model size is too large!", {"size": len(payload)})
    compressed = compress_payload(payload, _resolve_level(level, options))
    if len(compressed) >= MAX_PAYLOAD_SIZE:
        raise format_error(
            E_SIZE, "Model size is too large!", {"compressed_size": len(compressed)}
        )
    header = Header(
        magic=MAGIC,
        version=model.common.version,
        compressed_size=len(compressed),
        base_size=len(payload),
        flags=model.common.flags,
    )
    return pack_preamble(header, model.kind, options.byte_order) + compressed


def decode_model(
    data: bytes | bytearray | memoryview,
    *,
    options: CodecOptions | None = None,
) -> Model:
    """Decode a complete container, raising on the first failing stage."""
    options = options or CodecOptions()
    rep = get_reporter()
    rep.stage(DecodeStage.IDLE, f"{len(data)} bytes")
    header, kind = read_preamble(data, options.byte_order)
    major, minor, patch = header.version_triple
    rep.stage(DecodeStage.HEADER_VALIDATED, f"v{major}.{minor}.{patch}")
    rep.stage(DecodeStage.TAG_VALIDATED, kind.name.lower())
    view = memoryview(data)[PREAMBLE_SIZE : PREAMBLE_SIZE + header.compressed_size]
    base = decompress_payload(view, header.base_size)
    rep.stage(
        DecodeStage.INFLATED, f"{header.compressed_size} -> {header.base_size} bytes"
    )
    model = deserialize_model(base, kind, options.byte_order)
    model.common.flags = header.flags
    model.common.version = header.version
    rep.stage(DecodeStage.DESERIALIZED, repr(model.common.name))
    return model


def load_from_memory(
    data: bytes | bytearray | memoryview | None,
    logger: Logger | None = None,
    *,
    options: CodecOptions | None = None,
) -> Optional[Model]:
    if data is None:
        return None
    try:
        return decode_model(data, options=options)
    except CxmfError as e:
        report_failure(logger, e)
        return None


def _import_model(
    importer: ImportFunc, path: str, logger: Logger | None, options: CodecOptions
) -> Optional[Model]:
    try:
        model = importer(path, logger)
    except ImporterError as e:
        if options.fatal_import_faults:
            raise ImporterFault(e.message) from e
        report_failure(logger, e)
        return None
    if model is None:
        return None
    issues = validate_model(model)
    if issues:
        for issue in issues:
            send_log_message(logger, f"{issue.path}: {issue.message}")
        report_failure(
            logger,
            ValidationFailed(
                code=E_VALIDATION,
                message=f"Imported model '{path}' failed validation",
                context={"issues": [i.to_dict() for i in issues]},
            ),
        )
        return None
    return model


def load_from_file(
    path: str | Path | None,
    logger: Logger | None = None,
    *,
    options: CodecOptions | None = None,
) -> Optional[Model]:
    """Load a ``.cxmf`` file, or import a glTF/GLB file when an importer is set."""
    if path is None:
        return None
    options = options or CodecOptions()
    text = str(path).rstrip()
    if not text:
        return None
    try:
        if text.endswith(options.extension):
            data = read_file_bytes(Path(text), options.max_file_size)
            get_logger().debug("Read %d bytes from '%s'", len(data), text)
            return decode_model(data, options=options)
        importer = get_importer()
        if text.endswith(IMPORT_EXTENSIONS) and importer is not None:
            return _import_model(importer, text, logger, options)
        raise format_error(
            E_EXTENSION,
            f"Invalid input file extension name '{text}'",
            {"path": text},
        )
    except CxmfError as e:
        report_failure(logger, e)
        return None


def save_to_stream(
    model: Model,
    stream: OutputStream,
    level: CompressionLevel | str | None = None,
    logger: Logger | None = None,
    *,
    options: CodecOptions | None = None,
) -> bool:
    try:
        blob = encode_model(model, level, options=options)
    except CxmfError as e:
        report_failure(logger, e)
        return False
    for part in (
        blob[:HEADER_SIZE],
        blob[HEADER_SIZE:PREAMBLE_SIZE],
        blob[PREAMBLE_SIZE:],
    ):
        if not stream.write(part):
            get_logger().debug("Output stream rejected %d bytes", len(part))
            return False
    return True


def save_to_file(
    model: Model,
    directory: str | Path | None = None,
    level: CompressionLevel | str | None = None,
    logger: Logger | None = None,
    *,
    options: CodecOptions | None = None,
) -> bool:
    """Write ``<name>.cxmf`` (or ``unnamed.cxmf``) into ``directory``.

    ``directory`` defaults to the current working directory and is created
    when missing. An existing file is truncated.
    """
    options = options or CodecOptions()
    target = Path(directory) if directory else Path.cwd()
    name = model.common.name or options.default_name
    file_path = target / f"{name}{options.extension}"
    try:
        target.mkdir(parents=True, exist_ok=True)
        with open(file_path, "wb") as f:
            ok = save_to_stream(
                model, BinaryOutputStream(f), level, logger, options=options
            )
    except OSError as e:
        report_failure(logger, io_error(f"Can't open '{file_path}'", {"error": str(e)}))
        return False
    if ok:
        get_logger().debug("Saved '%s'", file_path)
    return ok


def model_summary(model: Model) -> Dict[str, Any]:
    common = model.common
    major, minor, patch = decode_version(common.version)
    rows: Dict[str, Any] = {
        "name": common.name or "<unnamed>",
        "kind": model.kind.name.lower(),
        "version": f"{major}.{minor}.{patch}",
        "flags": f"0x{common.flags:08x}",
        "vertices": len(model.vertices),
        "meshes": len(common.meshes),
        "meshlets": len(common.meshlets),
        "triangles": len(common.meshlet_triangles) // 3,
        "nodes": len(common.mesh_nodes),
        "materials": len(common.materials),
        "textures": len(common.textures),
        "samplers": len(common.samplers),
    }
    skinned = model.as_skinned()
    if skinned is not None:
        rows["bones"] = len(skinned.bones)
    if common.generator:
        rows["generator"] = common.generator
    return rows


def report_model(model: Model, reporter: Reporter | None = None) -> None:
    """Print a one-block overview of ``model`` through the reporter."""
    (reporter or get_reporter()).summary(
        f"Model '{model.common.name}'", model_summary(model)
    )

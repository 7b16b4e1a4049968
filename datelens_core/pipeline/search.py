"""
Search Pipeline
===============

Façade over validation, phone parsing and result synthesis.

Exposes the two public operations of the core, ``perform_image_search``
and ``perform_phone_search``. Both always return a complete
SearchResultEnvelope; no exception escapes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
import asyncio
import logging
import threading

from datelens_core.config import SystemConfig, get_default_config, load_config
from datelens_core.exceptions import ImageDecodeError
from datelens_core.phone.parser import PhoneNumberParser, PhoneParseResult
from datelens_core.segmentation.background import BackgroundRemover
from datelens_core.synthesis.records import ProfileRecord
from datelens_core.synthesis.synthesizer import ResultSynthesizer
from datelens_core.utils.image_utils import ImageBuffer, decode_image, encode_image_data_url
from datelens_core.validation.gate import HumanValidationGate, HumanValidationResult


logger = logging.getLogger(__name__)

INVALID_IMAGE_MESSAGE = "Invalid image data"
INVALID_PHONE_MESSAGE = "Invalid phone number format"
IMAGE_FAILURE_MESSAGE = "Failed to analyze image"
PHONE_FAILURE_MESSAGE = "Failed to search phone number"


class SearchKind(str, Enum):
    """Kind of search input."""
    PHOTO = "photo"
    PHONE = "phone"


# =============================================================================
# Envelope
# =============================================================================

@dataclass(frozen=True)
class PhotoPayload:
    """
    Payload of a photo search.

    Records may only be present when ``validation.is_human`` is True.
    """
    validation: HumanValidationResult
    records: Tuple[ProfileRecord, ...] = ()
    cutout: Optional[ImageBuffer] = None

    kind = SearchKind.PHOTO

    def __post_init__(self):
        object.__setattr__(self, "records", tuple(self.records))
        if self.records and not self.validation.is_human:
            raise ValueError("Photo records require a confirmed human")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "records": [r.to_dict() for r in self.records],
            "validation": self.validation.to_dict(),
            "cutout": encode_image_data_url(self.cutout) if self.cutout is not None else None,
        }


@dataclass(frozen=True)
class PhonePayload:
    """
    Payload of a phone search.

    Records may only be present when ``phone_info.is_valid`` is True.
    """
    phone_info: PhoneParseResult
    records: Tuple[ProfileRecord, ...] = ()

    kind = SearchKind.PHONE

    def __post_init__(self):
        object.__setattr__(self, "records", tuple(self.records))
        if self.records and not self.phone_info.is_valid:
            raise ValueError("Phone records require a valid phone number")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "records": [r.to_dict() for r in self.records],
            "phone_info": self.phone_info.to_dict(),
        }


SearchPayload = Union[PhotoPayload, PhonePayload]


@dataclass(frozen=True)
class SearchResultEnvelope:
    """
    Result of one search request.

    Attributes:
        success: False only for input errors and unexpected faults
        payload: Kind-specific payload on success
        error_message: Explanation on failure
    """
    success: bool
    payload: Optional[SearchPayload] = None
    error_message: Optional[str] = None

    @classmethod
    def ok(cls, payload: SearchPayload) -> "SearchResultEnvelope":
        return cls(success=True, payload=payload)

    @classmethod
    def failure(cls, message: str) -> "SearchResultEnvelope":
        return cls(success=False, error_message=message)

    @property
    def records(self) -> Tuple[ProfileRecord, ...]:
        """Records of the payload (empty without one)."""
        if self.payload is None:
            return ()
        return self.payload.records

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {"success": self.success}
        if self.payload is not None:
            data["payload"] = self.payload.to_dict()
        if self.error_message is not None:
            data["error_message"] = self.error_message
        return data


# =============================================================================
# Orchestrator
# =============================================================================

class SearchOrchestrator:
    """
    Runs photo and phone searches end to end.

    Example:
        >>> orchestrator = SearchOrchestrator.from_config("configs/default.yaml")
        >>> envelope = await orchestrator.search(SearchKind.PHONE, "+1 (212) 555-0100")
        >>> envelope.payload.phone_info.region_label
        'New York, NY'
    """

    def __init__(
        self,
        config: Optional[SystemConfig] = None,
        gate: Optional[HumanValidationGate] = None,
        phone_parser: Optional[PhoneNumberParser] = None,
        synthesizer: Optional[ResultSynthesizer] = None,
        background_remover: Optional[BackgroundRemover] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: System configuration (default config if None)
            gate: Validation gate (created from config if None)
            phone_parser: Phone parser (created from config if None)
            synthesizer: Result synthesizer (created from config if None)
            background_remover: Background remover
        """
        self.config = config or get_default_config()
        self.gate = gate or HumanValidationGate.from_config(self.config)
        self.phone_parser = phone_parser or PhoneNumberParser(
            min_digits=self.config.phone.min_digits,
            max_digits=self.config.phone.max_digits,
        )
        self.synthesizer = synthesizer or ResultSynthesizer.from_config(self.config.synthesis)
        self.background_remover = background_remover or BackgroundRemover()

    @classmethod
    def from_config(cls, config_path: Union[str, Path]) -> "SearchOrchestrator":
        """Create an orchestrator from a YAML configuration file."""
        return cls(load_config(config_path))

    async def search(
        self,
        kind: Union[SearchKind, str],
        data: Union[str, bytes],
    ) -> SearchResultEnvelope:
        """
        Run a search of the given kind.

        Args:
            kind: SearchKind or its value ("photo", "phone")
            data: Encoded image for photos, free-form text for phones
        """
        try:
            kind = SearchKind(kind)
        except ValueError:
            return SearchResultEnvelope.failure(f"Unsupported search kind: {kind}")

        if kind is SearchKind.PHOTO:
            return await self.search_photo(data)
        return await self.search_phone(data)

    async def search_photo(self, image_data: Union[str, bytes]) -> SearchResultEnvelope:
        """
        Validate an encoded image and synthesize results for it.

        A photo without a confirmed human is a successful search with
        zero records; only decode errors and faults fail the envelope.
        """
        logger.info("Starting image search")

        try:
            image = await asyncio.to_thread(decode_image, image_data)
        except ImageDecodeError as e:
            logger.warning(f"Rejected image input: {e}")
            return SearchResultEnvelope.failure(INVALID_IMAGE_MESSAGE)
        except Exception:
            logger.exception("Unexpected error decoding image")
            return SearchResultEnvelope.failure(IMAGE_FAILURE_MESSAGE)

        try:
            report = await self.gate.evaluate(image)
            records = self.synthesizer.synthesize_for_photo(report.result)

            cutout = None
            if self.config.validation.remove_background and report.masks:
                cutout = await self.background_remover.remove_background_async(image, report.masks)

            logger.info(
                f"Image search finished: {len(records)} record(s) for "
                f"{report.result.image_type.value} image"
            )
            return SearchResultEnvelope.ok(PhotoPayload(
                validation=report.result,
                records=records,
                cutout=cutout,
            ))
        except Exception:
            logger.exception("Error in image analysis")
            return SearchResultEnvelope.failure(IMAGE_FAILURE_MESSAGE)

    async def search_phone(self, phone_text: str) -> SearchResultEnvelope:
        """
        Parse a phone number and synthesize results for it.

        An invalid number fails the envelope with an explicit message.
        """
        logger.info("Starting phone number search")

        try:
            parse = self.phone_parser.parse(phone_text)
            if not parse.is_valid:
                logger.info(f"Rejected phone input with {len(parse.normalized_digits)} digit(s)")
                return SearchResultEnvelope.failure(INVALID_PHONE_MESSAGE)

            if self.config.phone.simulated_latency > 0:
                await asyncio.sleep(self.config.phone.simulated_latency)

            records = self.synthesizer.synthesize_for_phone(parse)

            logger.info(f"Phone search finished: {len(records)} record(s) in {parse.region_label}")
            return SearchResultEnvelope.ok(PhonePayload(phone_info=parse, records=records))
        except Exception:
            logger.exception("Error in phone search")
            return SearchResultEnvelope.failure(PHONE_FAILURE_MESSAGE)

    def __repr__(self) -> str:
        return (
            f"SearchOrchestrator("
            f"gate={self.gate.__class__.__name__}, "
            f"results=[{self.synthesizer.min_results}, {self.synthesizer.max_results}])"
        )


# =============================================================================
# Public operations
# =============================================================================

_default_orchestrator: Optional[SearchOrchestrator] = None
_default_lock = threading.Lock()


def get_default_orchestrator() -> SearchOrchestrator:
    """Get the process-wide orchestrator (lazy-loaded singleton)."""
    global _default_orchestrator
    with _default_lock:
        if _default_orchestrator is None:
            _default_orchestrator = SearchOrchestrator(get_default_config())
        return _default_orchestrator


def set_default_orchestrator(orchestrator: Optional[SearchOrchestrator]) -> None:
    """Replace (or with None, drop) the process-wide orchestrator."""
    global _default_orchestrator
    with _default_lock:
        _default_orchestrator = orchestrator


async def perform_image_search(image_data: Union[str, bytes]) -> SearchResultEnvelope:
    """
    Search synthetic profiles for an encoded image.

    Args:
        image_data: Data URL, base64 string, or raw image file bytes

    Returns:
        SearchResultEnvelope (never raises)
    """
    try:
        orchestrator = get_default_orchestrator()
    except Exception:
        logger.exception("Could not create search orchestrator")
        return SearchResultEnvelope.failure(IMAGE_FAILURE_MESSAGE)
    return await orchestrator.search_photo(image_data)


async def perform_phone_search(phone_text: str) -> SearchResultEnvelope:
    """
    Search synthetic profiles for a phone number.

    Args:
        phone_text: Free-form phone text

    Returns:
        SearchResultEnvelope (never raises)
    """
    try:
        orchestrator = get_default_orchestrator()
    except Exception:
        logger.exception("Could not create search orchestrator")
        return SearchResultEnvelope.failure(PHONE_FAILURE_MESSAGE)
    return await orchestrator.search_phone(phone_text)

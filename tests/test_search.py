"""
Test Search Pipeline
====================
"""

import asyncio

import pytest

from datelens_core.config import PhoneConfig, ValidationConfig
from datelens_core.detection.base import FaceObservation
from datelens_core.phone.parser import PhoneNumberParser
from datelens_core.pipeline.search import (
    PhonePayload,
    PhotoPayload,
    SearchKind,
    SearchResultEnvelope,
    perform_image_search,
    perform_phone_search,
    set_default_orchestrator,
)
from datelens_core.utils.image_utils import decode_image
from datelens_core.validation.gate import HumanValidationGate, HumanValidationResult

from conftest import make_gate, make_orchestrator, png_bytes, png_data_url


CONFIDENT_FACE = FaceObservation(bbox=(0, 0, 40, 40), probability=0.95)


class ExplodingGate(HumanValidationGate):
    """Gate failing with an unexpected error."""

    async def evaluate(self, image):
        raise RuntimeError("unexpected")


class TestPhotoSearch:
    """Tests for photo searches."""

    def test_black_image_is_successful_empty_search(self, black_image):
        """Test a photo without a person succeeds with zero records."""
        orchestrator = make_orchestrator(make_gate(faces=[]))

        envelope = asyncio.run(orchestrator.search_photo(png_data_url(black_image)))

        assert envelope.success is True
        assert envelope.error_message is None
        assert envelope.payload.validation.is_human is False
        assert envelope.records == ()
        assert envelope.payload.cutout is None

    def test_confirmed_human(self, black_image):
        """Test a confirmed human yields bounded records and a cut-out."""
        orchestrator = make_orchestrator(make_gate(faces=[CONFIDENT_FACE], people=1))

        envelope = asyncio.run(orchestrator.search_photo(png_bytes(black_image)))

        assert envelope.success is True
        assert envelope.payload.validation.is_human is True
        assert envelope.payload.validation.body_detected is True
        assert 1 <= len(envelope.records) <= 3
        assert envelope.payload.cutout.size == black_image.size

    def test_background_removal_disabled(self, black_image):
        """Test no cut-out is produced when disabled."""
        orchestrator = make_orchestrator(
            make_gate(faces=[CONFIDENT_FACE], people=1),
            validation=ValidationConfig(remove_background=False),
        )

        envelope = asyncio.run(orchestrator.search_photo(png_bytes(black_image)))

        assert envelope.payload.cutout is None

    def test_model_unavailable_falls_back(self, skin_image, unavailable_error):
        """Test a missing face model still produces a successful search."""
        orchestrator = make_orchestrator(make_gate(face_error=unavailable_error))

        envelope = asyncio.run(orchestrator.search_photo(png_data_url(skin_image)))

        validation = envelope.payload.validation
        assert envelope.success is True
        assert validation.used_fallback is True
        assert validation.is_human is True
        assert validation.face_confidence <= 0.8
        assert len(envelope.records) >= 1

    @pytest.mark.parametrize("data", ["", "data:image/png;base64,!!!", b"not an image"])
    def test_malformed_image(self, data):
        """Test undecodable input fails with an explicit message."""
        orchestrator = make_orchestrator(make_gate(faces=[]))

        envelope = asyncio.run(orchestrator.search_photo(data))

        assert envelope.success is False
        assert envelope.error_message == "Invalid image data"
        assert envelope.payload is None

    def test_unexpected_fault(self, black_image):
        """Test unexpected errors fail the envelope without raising."""
        orchestrator = make_orchestrator(ExplodingGate())

        envelope = asyncio.run(orchestrator.search_photo(png_bytes(black_image)))

        assert envelope.success is False
        assert envelope.error_message == "Failed to analyze image"


class TestPhoneSearch:
    """Tests for phone searches."""

    def test_valid_number(self):
        """Test a valid number yields records and phone info."""
        orchestrator = make_orchestrator(make_gate())

        envelope = asyncio.run(orchestrator.search_phone("+1 (212) 555-0100"))

        assert envelope.success is True
        assert envelope.payload.phone_info.region_label == "New York, NY"
        assert 1 <= len(envelope.records) <= 3

    def test_invalid_number(self):
        """Test an invalid number fails with an explicit message."""
        orchestrator = make_orchestrator(make_gate())

        envelope = asyncio.run(orchestrator.search_phone("12345"))

        assert envelope.success is False
        assert envelope.error_message == "Invalid phone number format"
        assert envelope.records == ()

    def test_simulated_latency(self):
        """Test a configured delay does not change the result."""
        orchestrator = make_orchestrator(make_gate(), phone=PhoneConfig(simulated_latency=0.01))

        assert asyncio.run(orchestrator.search_phone("2125550100")).success is True


class TestSearchDispatch:
    """Tests for SearchOrchestrator.search."""

    def test_kind_by_value(self):
        """Test kinds can be given by value."""
        orchestrator = make_orchestrator(make_gate())

        envelope = asyncio.run(orchestrator.search("phone", "2125550100"))

        assert envelope.payload.kind == SearchKind.PHONE

    def test_unsupported_kind(self):
        """Test unknown kinds fail the envelope."""
        orchestrator = make_orchestrator(make_gate())

        envelope = asyncio.run(orchestrator.search("email", "a@b.c"))

        assert envelope.success is False


class TestPublicOperations:
    """Tests for perform_image_search and perform_phone_search."""

    def test_perform_image_search(self, black_image):
        """Test the module-level image search uses the default orchestrator."""
        set_default_orchestrator(make_orchestrator(make_gate(faces=[CONFIDENT_FACE])))

        envelope = asyncio.run(perform_image_search(png_data_url(black_image)))

        assert envelope.success is True
        assert envelope.payload.validation.is_human is True

    def test_perform_phone_search(self):
        """Test the module-level phone search uses the default orchestrator."""
        set_default_orchestrator(make_orchestrator(make_gate()))

        envelope = asyncio.run(perform_phone_search("not a number"))

        assert envelope.success is False
        assert envelope.error_message == "Invalid phone number format"

    def test_concurrent_searches(self, black_image):
        """Test concurrent searches are independent."""
        set_default_orchestrator(make_orchestrator(make_gate(faces=[CONFIDENT_FACE])))

        async def run():
            return await asyncio.gather(
                perform_image_search(png_bytes(black_image)),
                perform_phone_search("+1 (415) 555-0100"),
                perform_phone_search("123"),
            )

        photo, phone, bad = asyncio.run(run())

        assert photo.success and phone.success
        assert not bad.success


class TestEnvelope:
    """Tests for result envelopes and payloads."""

    def test_photo_payload_requires_human(self):
        """Test records cannot accompany an unconfirmed photo."""
        from datelens_core.synthesis.synthesizer import ResultSynthesizer

        human = HumanValidationResult(True, 1, 0.9, False, "ok")
        records = ResultSynthesizer().synthesize(human)
        not_human = HumanValidationResult(False, 0, 0.0, False, "No face detected in the image")

        with pytest.raises(ValueError):
            PhotoPayload(validation=not_human, records=records)

    def test_phone_payload_requires_valid_number(self):
        """Test records cannot accompany an invalid number."""
        from datelens_core.synthesis.synthesizer import ResultSynthesizer

        valid = PhoneNumberParser().parse("2125550100")
        records = ResultSynthesizer().synthesize(valid)

        with pytest.raises(ValueError):
            PhonePayload(phone_info=PhoneNumberParser().parse("1"), records=records)

    def test_failure_to_dict(self):
        """Test failure envelopes carry only the error."""
        data = SearchResultEnvelope.failure("Invalid image data").to_dict()

        assert data == {"success": False, "error_message": "Invalid image data"}

    def test_photo_to_dict_includes_cutout(self, black_image):
        """Test the cut-out is serialized as a PNG data URL."""
        orchestrator = make_orchestrator(make_gate(faces=[CONFIDENT_FACE], people=1))
        envelope = asyncio.run(orchestrator.search_photo(png_bytes(black_image)))

        data = envelope.to_dict()

        assert data["success"] is True
        assert data["payload"]["kind"] == "photo"
        assert decode_image(data["payload"]["cutout"]).size == black_image.size
        assert len(data["payload"]["records"]) == len(envelope.records)

"""Pydantic request models for claim API endpoints."""

import base64
import binascii

from pydantic import BaseModel, Field

from crop_claims.core.exceptions import ValidationError
from crop_claims.schemas.claims import Locale


class ClaimSubmissionRequest(BaseModel):
    """Request model for submitting a damage report.

    Attributes:
        policy_id: Policy covering the damaged parcel
        lat: Latitude where the photo was taken
        lng: Longitude where the photo was taken
        image_base64: Damage photo, base64 encoded (a data URL prefix is accepted)
        image_mime_type: MIME type of the photo
        locale: Language for the assessment text
    """

    policy_id: str = Field(..., description="Policy identifier", examples=["pol_01"])
    lat: float = Field(..., ge=-90, le=90, description="Claim latitude", examples=[12.532981])
    lng: float = Field(..., ge=-180, le=180, description="Claim longitude", examples=[76.932119])
    image_base64: str = Field(..., min_length=1, description="Base64 encoded damage photo")
    image_mime_type: str = Field(default="image/jpeg", description="Photo MIME type")
    locale: Locale = Field(default=Locale.EN, description="Language for assessment text")

    def decode_image(self) -> bytes:
        """Decode the photo payload.

        Raises:
            ValidationError: If the payload is not valid base64
        """
        data = self.image_base64
        if data.startswith("data:") and "," in data:
            data = data.split(",", 1)[1]
        try:
            image = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError("Damage photo is not valid base64", original_error=e)
        if not image:
            raise ValidationError("Damage photo is empty")
        return image

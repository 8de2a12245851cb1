"""
Protocol message definitions using Pydantic.

Field aliases match the platform's query parameter and XML element names,
so models can be validated straight from parsed request data.
"""

from typing import Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class VerificationRequest(BaseModel):
    """Signature parameters taken from the callback URL query string."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    signature: str = Field(..., alias="msg_signature", description="Hex SHA-1 request signature")
    timestamp: int = Field(..., ge=0, description="Unix timestamp in seconds")
    nonce: int = Field(..., ge=0, description="Random number chosen by the platform")


class CallbackEnvelope(BaseModel):
    """Outer XML envelope of an encrypted callback."""
    model_config = ConfigDict(populate_by_name=True)

    to_user_name: str = Field(..., alias="ToUserName", description="Receiver (corp) id")
    agent_id: Optional[str] = Field(default=None, alias="AgentID")
    encrypt: str = Field(..., alias="Encrypt", description="Base64 ciphertext field")


class _CallbackMessageBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    to_user_name: str = Field(..., alias="ToUserName")
    from_user_name: str = Field(..., alias="FromUserName")
    create_time: int = Field(..., alias="CreateTime")
    msg_id: str = Field(..., alias="MsgId")
    agent_id: str = Field(..., alias="AgentID")


class TextMessage(_CallbackMessageBase):
    """Plain text message sent by a user."""
    msg_type: Literal["text"] = Field(..., alias="MsgType")
    content: str = Field(..., alias="Content")


class ImageMessage(_CallbackMessageBase):
    """Image message sent by a user."""
    msg_type: Literal["image"] = Field(..., alias="MsgType")
    pic_url: str = Field(..., alias="PicUrl")
    media_id: str = Field(..., alias="MediaId")


class UnrecognizedMessage(BaseModel):
    """Any decrypted message whose shape is not modelled above."""
    model_config = ConfigDict(frozen=True)

    msg_type: Optional[str] = None
    raw: Dict[str, str] = Field(default_factory=dict)


CallbackMessage = Union[TextMessage, ImageMessage, UnrecognizedMessage]

# Decode priority for typed messages; first successful validation wins.
KNOWN_MESSAGE_TYPES = (TextMessage, ImageMessage)


class EncryptedReply(BaseModel):
    """Encrypted passive reply returned to the platform."""
    encrypt: str = Field(..., description="Base64 ciphertext")
    msg_signature: str = Field(..., description="Signature over the ciphertext")
    timestamp: int
    nonce: str

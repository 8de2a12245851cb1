"""
XML envelope handling.

Callbacks arrive as a flat ``<xml>`` document whose children carry text
(usually wrapped in CDATA). Both the outer envelope and the decrypted
message use that shape.
"""

import xml.etree.ElementTree as ET
from typing import Dict

from pydantic import ValidationError

from .exceptions import EnvelopeError
from .protocol import (
    KNOWN_MESSAGE_TYPES,
    CallbackEnvelope,
    CallbackMessage,
    EncryptedReply,
    UnrecognizedMessage,
)


def parse_flat_xml(xml_text: str) -> Dict[str, str]:
    """
    Parse a flat ``<xml>`` document into a tag -> text mapping.

    Documents with a DOCTYPE are refused outright so entity declarations
    never reach the parser.

    Raises:
        EnvelopeError: If the document is malformed
    """
    if "<!DOCTYPE" in xml_text.upper():
        raise EnvelopeError("DOCTYPE declarations are not allowed")

    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise EnvelopeError(f"Malformed XML: {e}") from e

    return {child.tag: child.text or "" for child in root}


def parse_envelope(xml_text: str) -> CallbackEnvelope:
    """
    Extract the encrypted envelope fields from a callback body.

    Raises:
        EnvelopeError: If the XML is malformed or lacks required fields
    """
    fields = parse_flat_xml(xml_text)
    try:
        return CallbackEnvelope.model_validate(fields)
    except ValidationError as e:
        raise EnvelopeError(f"Incomplete callback envelope: {e.error_count()} field error(s)") from e


def parse_callback_message(xml_text: str) -> CallbackMessage:
    """
    Decode a decrypted message into the first matching typed model.

    Known shapes are tried in a fixed order; anything else becomes an
    ``UnrecognizedMessage`` holding the raw fields.

    Raises:
        EnvelopeError: If the XML itself is malformed
    """
    fields = parse_flat_xml(xml_text)
    for model in KNOWN_MESSAGE_TYPES:
        try:
            return model.model_validate(fields)
        except ValidationError:
            continue
    return UnrecognizedMessage(msg_type=fields.get("MsgType"), raw=fields)


def _cdata(value: str) -> str:
    # "]]>" cannot appear inside one CDATA section
    return "<![CDATA[" + value.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def render_reply(reply: EncryptedReply) -> str:
    """Render an encrypted reply as the XML body the platform expects."""
    return (
        "<xml>\n"
        f"<Encrypt>{_cdata(reply.encrypt)}</Encrypt>\n"
        f"<MsgSignature>{_cdata(reply.msg_signature)}</MsgSignature>\n"
        f"<TimeStamp>{reply.timestamp}</TimeStamp>\n"
        f"<Nonce>{_cdata(reply.nonce)}</Nonce>\n"
        "</xml>"
    )


def render_envelope(envelope: CallbackEnvelope) -> str:
    """Render an inbound-style envelope, mainly for tooling and tests."""
    parts = ["<xml>", f"<ToUserName>{_cdata(envelope.to_user_name)}</ToUserName>"]
    if envelope.agent_id is not None:
        parts.append(f"<AgentID>{_cdata(envelope.agent_id)}</AgentID>")
    parts.append(f"<Encrypt>{_cdata(envelope.encrypt)}</Encrypt>")
    parts.append("</xml>")
    return "\n".join(parts)

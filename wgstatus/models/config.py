from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
from wgstatus.common.expression import parse_list_expression
from wgstatus.common.logger import get_logger


logger = get_logger("config")


PEER_SECTION_PREFIX = "wireguard_"


class InterfaceSectionSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str = Field(alias=".name")
    proto: str | None = None
    addresses: list[str] = []
    allowed_zones: list[str] = []

    @field_validator("addresses", "allowed_zones", mode="before")
    @classmethod
    def _split_list(cls, value: Any):
        return parse_list_expression(value)


class PeerSectionSchema(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    interface: str
    public_key: str
    description: str | None = None
    allowed_ips: list[str] = []

    @field_validator("allowed_ips", mode="before")
    @classmethod
    def _split_list(cls, value: Any):
        return parse_list_expression(value)

    @classmethod
    def from_section(cls, section: dict[str, Any]):
        "section of type wireguard_<iface> -> PeerSectionSchema(interface=<iface>)"

        return cls.model_validate({
            **section,
            "interface": section[".type"][len(PEER_SECTION_PREFIX):],
        })


def split_network_sections(sections: list[dict[str, Any]]):
    interfaces: list[InterfaceSectionSchema] = []
    peers: list[PeerSectionSchema] = []

    for section in sections:
        section_type = section.get(".type", "")
        if section_type == "interface":
            interfaces.append(InterfaceSectionSchema.model_validate(section))
        elif section_type.startswith(PEER_SECTION_PREFIX):
            if not section.get("public_key"):
                # such a section can never match a runtime peer
                logger.info(f"ignoring peer section {section.get('.name')} without public key")
                continue
            peers.append(PeerSectionSchema.from_section(section))

    return interfaces, peers

from Sociocrates.dto.ObjectionDto import ObjectionDto
from Sociocrates.dto.ObjectionResolutionDto import ObjectionResolutionDto
from Sociocrates.share.BaseDto import BaseDto


class ResolveObjectionResultDto(BaseDto):
    objection: ObjectionDto
    resolution: ObjectionResolutionDto

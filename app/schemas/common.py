from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase JSON 키를 사용하는 기본 스키마 (snake_case 입력도 허용)"""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class MessageResponse(CamelModel):
    message: str


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    pages: int

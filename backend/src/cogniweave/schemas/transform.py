from cogniweave.schemas.common import CamelModel


class TransformRequest(CamelModel):
    user_id: str | None = None
    text_content: str | None = None


class TransformResponse(CamelModel):
    success: bool = True
    user_id: str
    transformed_text: str
    original_text: str
    processing_time: str

from cogniweave.agents.gateway import ModelGateway
from cogniweave.config import settings
from cogniweave.schemas.profile import CognitiveProfile

SYSTEM_PROMPT = (
    "You are an expert content transformation engine. Your task is to process the user's JSON "
    "request. You will rewrite the 'text_content' to perfectly match the cognitive 'profile' "
    "provided. Adhere strictly to all parameters in the profile. The output should only be "
    "the transformed text, with no additional commentary, explanations, or JSON formatting."
)


async def run_content_transformer(
    gateway: ModelGateway,
    profile: CognitiveProfile,
    text_content: str,
) -> str:
    payload = {
        "task": "simplify_text",
        "profile": profile.model_dump(by_alias=True),
        "text_content": text_content,
    }
    # Raw text is the result; no parsing.
    return await gateway.invoke(
        SYSTEM_PROMPT,
        payload,
        settings.transform_max_tokens,
        agent_name="content_transformer",
    )

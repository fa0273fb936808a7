"""Speech synthesis API controller."""

from fastapi import APIRouter, Body, Depends
from fastapi.responses import Response

from app.core.dependencies import get_speech_generator, validate_token
from app.schemas.base import ResponseSchema
from app.schemas.speech import SpeechRequest, VoiceListResponse
from app.services.speech_generator import SpeechGenerator


router = APIRouter(
    prefix="/api/speech",
    tags=["speech"],
    dependencies=[Depends(validate_token)],
)


@router.post("", response_class=Response)
async def synthesize_speech(
    payload: SpeechRequest = Body(...),
    speech_generator: SpeechGenerator = Depends(get_speech_generator),
):
    """Synthesize text with a voice and return audio/mpeg bytes.

    Returns 400 when text or voice is missing and 500 when the provider fails.
    """
    audio = await speech_generator.synthesize(payload.text, payload.voice_id)
    return Response(
        content=audio,
        media_type="audio/mpeg",
        headers={"Content-Length": str(len(audio))},
    )


@router.get("/voices", response_model=ResponseSchema)
async def list_voices(speech_generator: SpeechGenerator = Depends(get_speech_generator)):
    """List the voices available from the speech provider."""
    result = VoiceListResponse(**await speech_generator.list_voices())
    return ResponseSchema(
        status="success",
        message="Voices retrieved successfully",
        data=result.model_dump(),
    )

"""
Fake Gemini server for running the app without a real API key or network.

Simulates the generateContent endpoint on port 9100. Returns a canned tree
unless the prompt text contains a failure keyword, and sleeps briefly to
mimic model latency.

Usage:
    python treeid/scripts/fake_gemini_server.py
    GEMINI_API_KEY=fake GEMINI_BASE_URL=http://127.0.0.1:9100/v1beta uvicorn treeid.web.app:app
"""

import json
import time
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

app = FastAPI(title="fake-gemini-server")

CANNED = {
    "commonName": "Silver Birch",
    "scientificName": "Betula pendula",
    "description": "A slender deciduous tree with white peeling bark, common on heaths and light woodland.",
    "careTips": ["Plant in full sun.", "Keep young trees watered in dry spells.", "Avoid heavy pruning."],
}


@app.post("/v1beta/models/{model}:generateContent")
async def generate_content(model: str, request: Request):
    if not request.headers.get("x-goog-api-key"):
        return JSONResponse(status_code=403, content={"error": {"code": 403, "message": "API key missing"}})

    body = await request.json()
    parts = body["contents"][0]["parts"]
    image = parts[0].get("inline_data", {})
    print(f"[gemini] {model}: {image.get('mime_type')} {len(image.get('data', ''))} b64 chars")
    time.sleep(0.8)

    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": json.dumps(CANNED, indent=2)}]}}
        ]
    }


if __name__ == "__main__":
    print("Fake Gemini server starting on http://localhost:9100")
    uvicorn.run(app, host="0.0.0.0", port=9100)

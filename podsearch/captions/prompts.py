"""Caption prompt."""

CAPTION_PROMPT = """You are a social media expert.
Generate a viral TikTok/Reels caption for a video clip with this spoken content:
"{content}"

Rules:
1. Keep it short (under 2 sentences).
2. Be punchy and engaging (clickbait is okay but keep it high status).
3. Include 3-5 relevant hashtags.
4. Return Output format:
[Caption]
[Hashtags]

Example:
This is actually illegal to know 🤯
#business #startup #samparr"""

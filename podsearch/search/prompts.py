"""Intent classification and per-intent query expansion prompts."""

from pydantic import BaseModel

from podsearch.search.models import Intent

INTENT_CLASSIFICATION_PROMPT = """You are the "Brain" of the My First Million search engine.
Classify the user's search query into one of these 5 categories:

1. "CURATION": The user wants "cool", "viral", "interesting", or "best" content. Often mentions "short form", "clips", "repurpose".
   - Example: "cool ideas for short form", "best stories", "wildest moments"
2. "FACT_CHECK": The user asks "Did I say...", "Was I right...", "Predictions I made".
   - Example: "predictions I got wrong", "did I call the crypto crash"
3. "CONTRARIAN": The user wants moments where Sam DISAGREED with popular opinion, conventional wisdom, or common advice.
   - Example: "disagreed with conventional wisdom", "went against the grain", "unpopular opinion"
4. "ADVICE": The user wants specific "how-to" or tactical advice on a subject.
   - Example: "how to hire a CEO", "advice on burnout", "negotiation tactics"
5. "GENERAL": Standard keyword search.
   - Example: "Airbnb", "Sam's diet", "trends"

Return ONLY the category name (CURATION, FACT_CHECK, CONTRARIAN, ADVICE, or GENERAL)."""

EXPANSION_SYSTEM_PREFIX = "You are an expert search query generator.\n"

EXPANSION_USER_PROMPT = 'Generate 3-15 search phrases for: "{query}"'


class PromptTemplate(BaseModel):
    """One expansion strategy: what to look for and how to phrase it."""

    intent: Intent
    target: str
    brief: str
    rules: tuple[str, ...]
    instruction: str
    look_for: tuple[str, ...]
    example_query: str
    example_phrases: tuple[str, ...]

    model_config = {"frozen": True}

    def render(self) -> str:
        rules = "\n".join(f"{i}. {rule}" for i, rule in enumerate(self.rules, 1))
        look_for = "\n".join(f"- {item}" for item in self.look_for)
        example = "\n".join(self.example_phrases)
        return (
            f"TARGET: {self.target}\n"
            f"{self.brief}\n\n"
            f"CRITICAL RULES:\n{rules}\n\n"
            f"{self.instruction}\n{look_for}\n\n"
            f'Example Output for "{self.example_query}":\n{example}'
        )


CURATION_PROMPT = PromptTemplate(
    intent=Intent.CURATION,
    target="CURATION / HIGH-SIGNAL DISCOVERY",
    brief='The user is looking for "gems" - viral moments, mind-blowing ideas, or unique stories.',
    rules=(
        'IGNORE META-TERMS: Do NOT use words like "repurpose", "short form", "content", "clip", "video".',
        "NO NUMBERING: Return raw phrases only.",
        "FOCUS ON REACTION: Search for phrases Sam uses when he is EXCITED.",
    ),
    instruction="Generate 3-15 distinct search phrases that find:",
    look_for=(
        'Strong Reactions: "this blew my mind", "holy cow", "I can\'t believe this"',
        'Value Signaling: "billion dollar idea", "best business ever", "illegal to know this"',
        'Story Hooks: "let me tell you a story", "weirdest thing happened"',
    ),
    example_query="cool ideas for short form",
    example_phrases=(
        "this actually blew my mind",
        "the weirdest way to make money",
        "I have never told anyone this",
        "this is a billion dollar insight",
        "the smartest thing I ever did",
    ),
)

FACT_CHECK_PROMPT = PromptTemplate(
    intent=Intent.FACT_CHECK,
    target="FACT CHECK / PREDICTIONS",
    brief="The user is auditing Sam's past statements. Focus on accuracy, betting, and predictions.",
    rules=(
        "NO NUMBERING.",
        "Search for the ACT of predicting, not just the topic.",
    ),
    instruction="Generate 3-15 distinct search phrases that find:",
    look_for=(
        'Prediction Verbs: "predict", "bet", "guarantee", "believe"',
        'Accountability: "I was wrong", "I nailed this", "called it"',
        'Timeframes: "in 5 years", "by 2025", "next decade"',
    ),
    example_query="predictions I got wrong",
    example_phrases=(
        "I was completely wrong about",
        "my prediction failed",
        "I regret saying that",
        "I lost the bet when",
        "it turned out I was mistaken",
    ),
)

CONTRARIAN_PROMPT = PromptTemplate(
    intent=Intent.CONTRARIAN,
    target="CONTRARIAN / DISAGREEMENT WITH CONVENTIONAL WISDOM",
    brief="The user wants moments where Sam disagreed with popular opinion or common advice.",
    rules=(
        "NO NUMBERING.",
        "Use SHORT, NATURAL phrases Sam would actually say MID-SENTENCE.",
        "Focus on DISAGREEMENT markers, not formal language.",
    ),
    instruction="Generate 3-15 distinct search phrases that find:",
    look_for=(
        'Disagreement: "everyone\'s wrong about", "that\'s BS", "I disagree"',
        'Contrarian markers: "unpopular opinion", "hot take", "against the grain"',
        'Dismissal of norms: "the common advice is", "people always say but", "most experts think"',
    ),
    example_query="disagreed with conventional wisdom",
    example_phrases=(
        "everyone thinks this but",
        "the common advice is wrong",
        "people always say you should",
        "most experts are wrong about",
        "that's complete BS",
        "I disagree with the idea",
        "unpopular opinion but",
        "contrary to what people think",
    ),
)

ADVICE_PROMPT = PromptTemplate(
    intent=Intent.ADVICE,
    target="TACTICAL ADVICE",
    brief='The user wants "How-To" knowledge. Focus on frameworks, rules, and lessons.',
    rules=(
        "NO NUMBERING.",
        "Search for the LESSON, not the topic keyword alone.",
    ),
    instruction="Generate 3-15 distinct search phrases that find:",
    look_for=(
        'Frameworks: "the rule is", "my data shows", "the system I use"',
        'Imperatives: "never do this", "always hire", "start by"',
        'Experience: "my biggest lesson", "what I learned from"',
    ),
    example_query="advice on burnout",
    example_phrases=(
        "when you feel burned out",
        "the cure for burnout is",
        "my rule for relaxation",
        "how I manage stress",
        "stop working when",
    ),
)

GENERAL_PROMPT = PromptTemplate(
    intent=Intent.GENERAL,
    target="GENERAL TOPIC SEARCH",
    brief="The user wants mentions of a specific entity or topic.",
    rules=(
        "NO NUMBERING.",
        "Place the topic in context.",
    ),
    instruction="Generate 3-15 distinct search phrases to find this topic.",
    look_for=(
        "Use synonyms and related concepts.",
        "Place the topic in context of a sentence.",
    ),
    example_query="Airbnb",
    example_phrases=(
        "when Brian Chesky told me",
        "the business model of Airbnb",
        "staying in an Airbnb",
        "vacation rental market",
        "competition for hotels",
    ),
)

STRATEGY_PROMPTS: dict[Intent, PromptTemplate] = {
    Intent.CURATION: CURATION_PROMPT,
    Intent.FACT_CHECK: FACT_CHECK_PROMPT,
    Intent.CONTRARIAN: CONTRARIAN_PROMPT,
    Intent.ADVICE: ADVICE_PROMPT,
    Intent.GENERAL: GENERAL_PROMPT,
}


def select_prompt(intent: Intent) -> PromptTemplate:
    """Expansion strategy for an intent. Anything unrecognised gets GENERAL."""
    return STRATEGY_PROMPTS.get(intent, GENERAL_PROMPT)

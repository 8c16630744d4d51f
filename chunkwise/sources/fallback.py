"""
Static content source - hand-authored chunks used when the AI source fails.

Chunk sets are keyed by (target_language_code, native_language_code). Pairs
without a set get a generic one-chunk lesson. All shipped sets are built as
ChunkContent at import time and are covered by the test suite, so this
source never raises and its lessons always validate.
"""

import logging

from chunkwise.schemas import ChunkContent, LessonRequest

from .base import ContentSource

logger = logging.getLogger(__name__)


def _chunk(**fields) -> ChunkContent:
    return ChunkContent(**fields)


STARTER_CHUNKS: dict[tuple[str, str], list[ChunkContent]] = {
    ("de", "en"): [
        _chunk(
            target_phrase="Guten Morgen",
            native_translation="Good morning",
            example_sentence="Guten Morgen! Wie geht es Ihnen?",
            usage_note="Use as a morning greeting until about noon",
            explanation="A polite way to greet someone in the morning",
            distractors=["Good evening", "Good night", "Goodbye"],
            correct_usage_context="When greeting someone in the morning",
            wrong_usage_contexts=["When saying goodbye", "When greeting at midnight", "When asking for help"],
        ),
        _chunk(
            target_phrase="Danke schön",
            native_translation="Thank you very much",
            example_sentence="Danke schön für Ihre Hilfe!",
            usage_note="A polite and warm way to express gratitude",
            explanation='"Danke" means "thank you" and "schön" makes it extra warm',
            distractors=["You're welcome", "Excuse me", "Sorry"],
            correct_usage_context="When someone has helped you or done something kind",
            wrong_usage_contexts=["When greeting someone", "When asking a question", "When ordering food"],
        ),
        _chunk(
            target_phrase="Auf Wiedersehen",
            native_translation="Goodbye",
            example_sentence="Auf Wiedersehen! Bis morgen.",
            usage_note='A formal goodbye, literally "until we see each other again"',
            explanation='More formal than "Tschüss"; use it with strangers or at work',
            distractors=["Hello", "Good morning", "Thank you"],
            correct_usage_context="When leaving a formal situation or saying goodbye to strangers",
            wrong_usage_contexts=["When arriving somewhere", "When asking for directions", "When greeting a friend"],
        ),
    ],
    ("fr", "en"): [
        _chunk(
            target_phrase="Bonjour",
            native_translation="Hello / Good day",
            example_sentence="Bonjour, comment allez-vous ?",
            usage_note="The standard French greeting for any time of day",
            explanation="The most common and versatile French greeting",
            distractors=["Goodbye", "Good evening", "Thank you"],
            correct_usage_context="When greeting someone during the day",
            wrong_usage_contexts=["When saying goodbye", "When asking for help", "When ordering food"],
        ),
        _chunk(
            target_phrase="Merci beaucoup",
            native_translation="Thank you very much",
            example_sentence="Merci beaucoup pour votre aide !",
            usage_note="A warm and polite way to say thank you",
            explanation='"Merci" means thank you and "beaucoup" means very much',
            distractors=["You're welcome", "Please", "Excuse me"],
            correct_usage_context="When someone has helped you or done something kind",
            wrong_usage_contexts=["When greeting someone", "When saying goodbye", "When apologising"],
        ),
        _chunk(
            target_phrase="Au revoir",
            native_translation="Goodbye",
            example_sentence="Au revoir ! À bientôt.",
            usage_note="Standard goodbye for any situation",
            explanation='Literally "until we see again"; works in formal and casual settings',
            distractors=["Hello", "Good morning", "Please"],
            correct_usage_context="When leaving or saying goodbye",
            wrong_usage_contexts=["When arriving somewhere", "When thanking someone", "When asking a question"],
        ),
    ],
    ("es", "en"): [
        _chunk(
            target_phrase="Buenos días",
            native_translation="Good morning",
            example_sentence="¡Buenos días! ¿Cómo estás?",
            usage_note="Morning greeting, used until about noon",
            explanation="The standard Spanish morning greeting",
            distractors=["Good evening", "Goodbye", "Thank you"],
            correct_usage_context="When greeting someone in the morning",
            wrong_usage_contexts=["When saying goodbye", "When greeting at night", "When asking for help"],
        ),
        _chunk(
            target_phrase="Muchas gracias",
            native_translation="Thank you very much",
            example_sentence="¡Muchas gracias por tu ayuda!",
            usage_note="A warm, enthusiastic way to thank someone",
            explanation='"Muchas" means "many" and "gracias" means "thanks"',
            distractors=["You're welcome", "Excuse me", "Please"],
            correct_usage_context="When someone has done something kind for you",
            wrong_usage_contexts=["When greeting someone", "When saying goodbye", "When apologising"],
        ),
        _chunk(
            target_phrase="Hasta luego",
            native_translation="See you later",
            example_sentence="¡Hasta luego! Nos vemos mañana.",
            usage_note="A casual, friendly way to say goodbye",
            explanation='Literally "until later"; common in everyday situations',
            distractors=["Hello", "Good morning", "Excuse me"],
            correct_usage_context="When saying goodbye to someone you will see again",
            wrong_usage_contexts=["When greeting someone", "When asking for help", "When thanking someone"],
        ),
    ],
    ("it", "en"): [
        _chunk(
            target_phrase="Buongiorno",
            native_translation="Good morning",
            example_sentence="Buongiorno! Come sta?",
            usage_note="A polite greeting from morning until early afternoon",
            explanation="Made of buon (good) and giorno (day)",
            distractors=["Good night", "Goodbye", "Thank you"],
            correct_usage_context="When greeting a shopkeeper in the morning",
            wrong_usage_contexts=["When going to bed", "When leaving a party", "When apologising"],
        ),
        _chunk(
            target_phrase="Grazie mille",
            native_translation="Thanks a lot",
            example_sentence="Grazie mille per il regalo!",
            usage_note="A friendly, enthusiastic thank you",
            explanation='Literally "a thousand thanks"',
            distractors=["You're welcome", "Excuse me", "Good luck"],
            correct_usage_context="When a friend gives you a present",
            wrong_usage_contexts=["When you bump into someone", "When you answer the phone", "When you say goodbye"],
        ),
        _chunk(
            target_phrase="A dopo",
            native_translation="See you later",
            example_sentence="Ciao, a dopo!",
            usage_note="Use it when you will see the person again the same day",
            explanation='"Dopo" means "after" or "later"',
            distractors=["Nice to meet you", "Good evening", "Please"],
            correct_usage_context="When leaving a friend you will meet again this afternoon",
            wrong_usage_contexts=["When meeting someone for the first time", "When ordering a pizza", "When saying sorry"],
        ),
    ],
    ("pt", "en"): [
        _chunk(
            target_phrase="Bom dia",
            native_translation="Good morning",
            example_sentence="Bom dia! Tudo bem?",
            usage_note="The usual greeting until lunchtime",
            explanation='"Bom" means good and "dia" means day',
            distractors=["Good night", "See you tomorrow", "Thank you"],
            correct_usage_context="When greeting your teacher in the morning",
            wrong_usage_contexts=["When going to sleep", "When leaving school", "When asking the time"],
        ),
        _chunk(
            target_phrase="Muito obrigado",
            native_translation="Thank you very much",
            example_sentence="Muito obrigado pela ajuda!",
            usage_note='Boys say "obrigado", girls say "obrigada"',
            explanation='"Muito" means very and "obrigado" means thank you',
            distractors=["You're welcome", "Excuse me", "Good luck"],
            correct_usage_context="When someone helps you carry your bag",
            wrong_usage_contexts=["When you arrive at a party", "When you answer the phone", "When you are lost"],
        ),
        _chunk(
            target_phrase="Até logo",
            native_translation="See you later",
            example_sentence="Tchau, até logo!",
            usage_note="A friendly goodbye when you expect to meet again",
            explanation='"Até" means until and "logo" means soon',
            distractors=["Nice to meet you", "Good evening", "Please"],
            correct_usage_context="When leaving a friend you will see again soon",
            wrong_usage_contexts=["When meeting someone new", "When ordering food", "When apologising"],
        ),
    ],
    ("en", "fr"): [
        _chunk(
            target_phrase="Good morning",
            native_translation="Bonjour",
            example_sentence="Good morning! How are you?",
            usage_note="Pour saluer quelqu'un le matin",
            explanation="La salutation polie du matin en anglais",
            distractors=["Bonsoir", "Bonne nuit", "Au revoir"],
            correct_usage_context="Quand tu arrives à l'école le matin",
            wrong_usage_contexts=["Quand tu vas te coucher", "Quand tu quittes une fête", "Quand tu demandes de l'aide"],
        ),
        _chunk(
            target_phrase="Thank you so much",
            native_translation="Merci beaucoup",
            example_sentence="Thank you so much for your help!",
            usage_note="Pour remercier quelqu'un chaleureusement",
            explanation='"So much" rend le merci plus fort',
            distractors=["De rien", "Excuse-moi", "Pardon"],
            correct_usage_context="Quand un ami te prête son vélo",
            wrong_usage_contexts=["Quand tu dis bonjour", "Quand tu poses une question", "Quand tu commandes à manger"],
        ),
        _chunk(
            target_phrase="See you later",
            native_translation="À plus tard",
            example_sentence="Bye, see you later!",
            usage_note="Pour dire au revoir à quelqu'un que tu reverras bientôt",
            explanation='Littéralement "je te vois plus tard"',
            distractors=["Enchanté", "Bonjour", "S'il te plaît"],
            correct_usage_context="Quand tu quittes un copain que tu reverras cet après-midi",
            wrong_usage_contexts=["Quand tu rencontres quelqu'un", "Quand tu remercies quelqu'un", "Quand tu t'excuses"],
        ),
    ],
    ("en", "de"): [
        _chunk(
            target_phrase="Good morning",
            native_translation="Guten Morgen",
            example_sentence="Good morning! How are you?",
            usage_note="Zur Begrüßung am Vormittag",
            explanation="Die höfliche Morgenbegrüßung auf Englisch",
            distractors=["Guten Abend", "Gute Nacht", "Auf Wiedersehen"],
            correct_usage_context="Wenn du morgens in die Schule kommst",
            wrong_usage_contexts=["Wenn du ins Bett gehst", "Wenn du eine Party verlässt", "Wenn du um Hilfe bittest"],
        ),
        _chunk(
            target_phrase="Thank you so much",
            native_translation="Vielen Dank",
            example_sentence="Thank you so much for your help!",
            usage_note="Um sich herzlich zu bedanken",
            explanation='"So much" macht den Dank stärker',
            distractors=["Bitte schön", "Entschuldigung", "Viel Glück"],
            correct_usage_context="Wenn dir ein Freund sein Fahrrad leiht",
            wrong_usage_contexts=["Wenn du jemanden begrüßt", "Wenn du eine Frage stellst", "Wenn du Essen bestellst"],
        ),
        _chunk(
            target_phrase="See you later",
            native_translation="Bis später",
            example_sentence="Bye, see you later!",
            usage_note="Zum Abschied, wenn ihr euch bald wiederseht",
            explanation='Wörtlich "ich sehe dich später"',
            distractors=["Freut mich", "Hallo", "Gern geschehen"],
            correct_usage_context="Wenn du dich von einem Freund verabschiedest, den du heute noch triffst",
            wrong_usage_contexts=["Wenn du jemanden kennenlernst", "Wenn du dich bedankst", "Wenn du dich entschuldigst"],
        ),
    ],
}

# Unknown language pairs: one near-universal chunk
GENERIC_CHUNKS: list[ChunkContent] = [
    _chunk(
        target_phrase="OK",
        native_translation="All right",
        example_sentence="OK, let's go!",
        usage_note="Understood almost everywhere",
        explanation="A short way to agree or say that something is fine",
        distractors=["No", "Maybe", "Goodbye"],
        correct_usage_context="When you agree with a plan",
        wrong_usage_contexts=["When you refuse something", "When you leave", "When you are surprised"],
    ),
]


class StaticContentSource(ContentSource):
    """Fallback source: in-process lookup by language pair, never fails."""

    name = "static"

    def __init__(
        self,
        chunk_sets: dict[tuple[str, str], list[ChunkContent]] | None = None,
        generic_chunks: list[ChunkContent] | None = None,
    ):
        self.chunk_sets = STARTER_CHUNKS if chunk_sets is None else chunk_sets
        self.generic_chunks = GENERIC_CHUNKS if generic_chunks is None else generic_chunks

    @property
    def supported_pairs(self) -> list[tuple[str, str]]:
        return sorted(self.chunk_sets)

    def lookup(self, target_language_code: str, native_language_code: str) -> list[ChunkContent]:
        chunks = self.chunk_sets.get((target_language_code, native_language_code))
        if chunks is None:
            logger.warning(
                f"No starter chunks for {target_language_code}/{native_language_code}, using generic set"
            )
            return list(self.generic_chunks)
        return list(chunks)

    def fetch_chunks(self, request: LessonRequest) -> list[ChunkContent]:
        chunks = self.lookup(request.target_language_code, request.native_language_code)
        logger.info(
            f"Static fallback: {len(chunks)} chunks for "
            f"{request.target_language_code}/{request.native_language_code}"
        )
        return chunks

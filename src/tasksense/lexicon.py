"""
Static keyword and phrase tables used by the lexical classifier, the
segmenter and the entity extractor.

Tables are built once at import and exposed as tuples, frozensets and
read-only mappings. Phrase tuples are ordered longest-first where one
phrase is a prefix of another, so the first match is the most specific.
"""

from types import MappingProxyType

from .models.task import Category

# =============================================================================
# Actionability
# =============================================================================

REQUEST_PHRASES: tuple[str, ...] = (
    'can you please remind me to',
    'could you please remind me to',
    'can you remind me to',
    'could you remind me to',
    'would you remind me to',
    'please remind me to',
    'can you please',
    'could you please',
    'would you please',
    'would you mind',
    'can you',
    'could you',
    'would you',
    'remind me to',
    'remind me',
    'reminder to',
    "don't let me forget to",
    'dont let me forget to',
    "don't forget to",
    'dont forget to',
    'do not forget to',
    'remember to',
    'make sure to',
    'make sure you',
    'make sure i',
    'we need to',
    'i need to',
    'you need to',
    'need to',
    'we have to',
    'i have to',
    'you have to',
    'we should',
    'you should',
    "let's",
    'lets',
    'let us',
    'note to self',
    'please',
)

# Request phrases that also count when they appear after the first word
# ("Buy milk please", "Tomorrow remind me to call mom")
INLINE_REQUEST_PHRASES: tuple[str, ...] = (
    'please',
    'remind me to',
    "don't forget to",
    'dont forget to',
    'remember to',
    'make sure to',
)

# Closed list of base-form verbs. Multi-word verbs come first.
IMPERATIVE_VERBS: tuple[str, ...] = (
    'pick up',
    'drop off',
    'sign up',
    'set up',
    'follow up',
    'clean up',
    'buy',
    'call',
    'schedule',
    'send',
    'finish',
    'pay',
    'clean',
    'fix',
    'review',
    'submit',
    'book',
    'get',
    'grab',
    'order',
    'email',
    'text',
    'return',
    'cancel',
    'confirm',
    'prepare',
    'complete',
    'update',
    'renew',
    'wash',
    'water',
    'feed',
    'walk',
    'repair',
    'replace',
    'change',
    'write',
    'check',
    'visit',
    'bring',
    'take',
    'organize',
    'tidy',
    'cook',
    'file',
    'print',
    'reply',
    'plan',
    'register',
)

QUESTION_WORDS: frozenset[str] = frozenset(
    {'what', 'when', 'where', 'why', 'how', 'who', 'which', 'whose'}
)

# Pleasantries and acknowledgements that never form a task on their own
GENERIC_PHRASES: frozenset[str] = frozenset(
    {
        'ok', 'okay', 'yes', 'no', 'sure', 'thanks', 'thank you', 'hello',
        'hi', 'hey', 'bye', 'goodbye', 'see you', 'talk later', 'good',
        'great', 'awesome', 'nice', 'cool', 'sounds good', 'got it', 'lol',
    }
)

# =============================================================================
# Categories
# =============================================================================

# Table order breaks ties when one word belongs to several categories
CATEGORY_KEYWORDS: MappingProxyType = MappingProxyType(
    {
        Category.HOUSEHOLD: (
            'buy', 'grocery', 'groceries', 'clean', 'cleaning', 'fix', 'laundry',
            'dishes', 'vacuum', 'trash', 'garbage', 'kitchen', 'bathroom',
            'repair', 'faucet', 'milk', 'bread', 'eggs', 'shopping', 'cook',
            'lawn', 'garden', 'plants',
        ),
        Category.WORK: (
            'meeting', 'client', 'report', 'project', 'presentation', 'deadline',
            'office', 'proposal', 'boss', 'colleague', 'conference', 'timeline',
            'slides', 'invoice',
        ),
        Category.HEALTH: (
            'doctor', 'dentist', 'appointment', 'prescription', 'pharmacy',
            'medication', 'medicine', 'pills', 'gym', 'workout', 'checkup',
            'therapy', 'vitamins', 'hospital', 'vet',
        ),
        Category.FINANCE: (
            'bill', 'bills', 'pay', 'bank', 'tax', 'taxes', 'insurance', 'rent',
            'mortgage', 'budget', 'payment', 'loan', 'credit card',
        ),
        Category.FAMILY: (
            'mom', 'dad', 'mother', 'father', 'kids', 'children', 'birthday',
            'school', 'family', 'grandma', 'grandpa', 'sister', 'brother',
            'anniversary', 'wife', 'husband',
        ),
        Category.PERSONAL: (
            'haircut', 'friend', 'hobby', 'coffee', 'library', 'yoga', 'passport',
        ),
    }
)

# =============================================================================
# Priority
# =============================================================================

URGENT_MARKERS: tuple[str, ...] = (
    'urgent', 'urgently', 'asap', 'immediately', 'emergency', 'critical', 'right away',
)

HIGH_MARKERS: tuple[str, ...] = ('high priority', 'important', 'crucial')

LOW_MARKERS: tuple[str, ...] = (
    'low priority', 'no rush', 'whenever', 'eventually', 'when you get a chance',
    'when you have time',
)

# =============================================================================
# Title cleaning
# =============================================================================

# Words that introduce the next clause and carry no meaning of their own
LEADING_CONJUNCTIONS: tuple[str, ...] = ('and then', 'and also', 'and', 'also', 'then', 'plus')

# Labels that prefix a task line ("TODO: ...", "URGENT: ...")
TASK_LABELS: tuple[str, ...] = (
    'action items', 'action item', 'to do', 'todo', 'reminder', 'note',
    'urgent', 'asap', 'important', 'fyi',
)

LEADING_DETERMINERS: tuple[str, ...] = ('the', 'a', 'an', 'my', 'our', 'your')

# =============================================================================
# Calendar words
# =============================================================================

WEEKDAY_NAMES: MappingProxyType = MappingProxyType(
    {
        'monday': 0, 'tuesday': 1, 'wednesday': 2, 'thursday': 3,
        'friday': 4, 'saturday': 5, 'sunday': 6,
    }
)

MONTH_NAMES: MappingProxyType = MappingProxyType(
    {
        'january': 1, 'jan': 1, 'february': 2, 'feb': 2, 'march': 3, 'mar': 3,
        'april': 4, 'apr': 4, 'may': 5, 'june': 6, 'jun': 6, 'july': 7, 'jul': 7,
        'august': 8, 'aug': 8, 'september': 9, 'sept': 9, 'sep': 9,
        'october': 10, 'oct': 10, 'november': 11, 'nov': 11, 'december': 12, 'dec': 12,
    }
)

NUMBER_WORDS: MappingProxyType = MappingProxyType(
    {
        'a': 1, 'an': 1, 'one': 1, 'two': 2, 'three': 3, 'four': 4, 'five': 5,
        'six': 6, 'seven': 7, 'eight': 8, 'nine': 9, 'ten': 10,
    }
)

# Abbreviations whose trailing period does not end a sentence
ABBREVIATIONS: frozenset[str] = frozenset(
    {'dr', 'mr', 'mrs', 'ms', 'st', 'vs', 'etc', 'e.g', 'i.e', 'approx', 'appt'}
)

# Clock suffixes end a sentence only when a capitalized word follows
MERIDIEM_ABBREVIATIONS: frozenset[str] = frozenset({'a.m', 'p.m', 'am', 'pm'})

# Request phrases that open a new clause after a comma or conjunction
# ("Buy milk and remember to call mom")
CLAUSE_REQUEST_PHRASES: tuple[str, ...] = (
    'remind me to',
    "don't forget to",
    'dont forget to',
    'remember to',
    'make sure to',
    'we need to',
    'i need to',
    'need to',
    'can you',
    'could you',
)

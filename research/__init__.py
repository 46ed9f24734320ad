"""
research-brief core package.

Modules
───────
models         — Pydantic records (Candidate, ScoredCandidate, AgentResponse, ChatMessage)
                 and the Lookup result type
text           — tokenising, stop words, whitespace + truncation helpers
topic          — strip interrogative framing from a question
reference      — Wikipedia summary lookup
keywords       — topic + most frequent summary terms
papers         — arXiv query building, Atom parsing, recency window
relevance      — topic scoring and acceptance of candidate papers
composer       — final answer text and the static templates
pipeline       — one research run: lookup → keywords → search → filter → compose
router         — query classification and the process_query entry point
conversations  — in-memory keyed conversation store
"""

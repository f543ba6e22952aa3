"""Hypothesis strategies for Relay messages and tool markers."""

from hypothesis import strategies as st

from relay import Message

roles = st.sampled_from(["user", "assistant", "system", "search_output"])

# Message text without braces so custom templates stay unambiguous.
message_text = st.text(
    max_size=40,
    alphabet=st.characters(whitelist_categories=("L", "N", "P", "Z"), blacklist_characters="{}"),
)

messages = st.builds(Message, role=roles, text=message_text)

tool_names = st.sampled_from(["a", "b", "search", "calc_2", "web.fetch"])

# Tool input that cannot contain a closing tag.
tool_input = st.text(
    max_size=20,
    alphabet=st.characters(whitelist_categories=("L", "N", "Zs"), whitelist_characters="\n.,!?"),
)

"""
Tests for conversation state.
"""

from browser_agent.conversation import SYSTEM_PROMPT, Conversation


class TestConversation:
    """Tests for the transcript."""

    def test_seeded_with_system_and_user_turns(self):
        """Test the two seed turns."""
        conversation = Conversation("What is on example.com?")

        roles = [m.role for m in conversation.messages]
        assert roles == ["system", "user"]
        assert conversation.messages[0].content == SYSTEM_PROMPT
        assert conversation.messages[1].content == "What is on example.com?"

    def test_add_exchange_appends_assistant_then_tool(self):
        """Test exchange ordering."""
        conversation = Conversation("q")
        conversation.add_exchange("GET_TITLE", "Example Domain")

        assert len(conversation) == 4
        assert [m.role for m in conversation.messages[2:]] == ["assistant", "tool"]
        assert conversation.messages[3].content == "Example Domain"

    def test_render_format(self):
        """Test the exact prompt layout."""
        conversation = Conversation("find it", system_prompt="You browse.")
        conversation.add_exchange("GET_URL", "https://example.com/")

        assert conversation.render() == (
            "SYSTEM: You browse.\n\n"
            "USER: find it\n\n"
            "ASSISTANT: GET_URL\n\n"
            "TOOL: https://example.com/"
        )

    def test_render_is_idempotent_and_ordered(self):
        """Rendering twice gives the same ordered text."""
        conversation = Conversation("q")
        for i in range(3):
            conversation.add_exchange(f"cmd {i}", f"obs {i}")

        first = conversation.render()
        assert conversation.render() == first
        positions = [first.index(f"obs {i}") for i in range(3)]
        assert positions == sorted(positions)

    def test_messages_view_is_immutable(self):
        """The messages view does not track later turns."""
        conversation = Conversation("q")
        view = conversation.messages
        conversation.add_exchange("GET_TITLE", "t")

        assert len(view) == 2
        assert isinstance(view, tuple)

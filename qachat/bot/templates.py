"""Telegram response templates."""

from __future__ import annotations


def _en(lang: str) -> bool:
    return (lang or "vi").lower() == "en"


def mode_label(mode: str, lang: str = "vi") -> str:
    if mode == "gemini":
        return "Gemini AI"
    return "QA Supabase"


def greeting_text(lang: str = "vi") -> str:
    return "Hi there! How can I help you today?"


def start_text(mode: str, lang: str = "vi") -> str:
    if _en(lang):
        return (
            "Gemini & Gradio QA chat is ready.\n"
            f"Mode: **{mode_label(mode, lang)}**\n"
            "Send plain text to ask a question.\n"
            "Switch backends with the buttons or /mode gemini | /mode qa.\n"
            "/new starts a fresh conversation."
        )
    return (
        "Chat Gemini & Gradio QA đã sẵn sàng.\n"
        f"Chế độ: **{mode_label(mode, lang)}**\n"
        "Gửi tin nhắn để đặt câu hỏi.\n"
        "Đổi chế độ bằng các nút hoặc /mode gemini | /mode qa.\n"
        "/new để bắt đầu cuộc trò chuyện mới."
    )


def help_text(lang: str = "vi") -> str:
    if _en(lang):
        return (
            "How it works\n"
            "- **Gemini AI**: conversational answers, the session remembers earlier turns\n"
            "- **QA Supabase**: each question is sent to the QA service; related files come back as links\n"
            "- One question at a time: wait for the reply before sending the next one\n"
            "- History is kept in memory only and is lost on restart or /new"
        )
    return (
        "Cách sử dụng\n"
        "- **Gemini AI**: trò chuyện, phiên nhớ các lượt trước\n"
        "- **QA Supabase**: mỗi câu hỏi được gửi tới dịch vụ QA; file liên quan trả về dạng liên kết\n"
        "- Mỗi lần một câu hỏi: chờ trả lời rồi mới gửi câu tiếp theo\n"
        "- Lịch sử chỉ lưu trong bộ nhớ, mất khi khởi động lại hoặc /new"
    )


def mode_changed_text(mode: str, lang: str = "vi") -> str:
    if _en(lang):
        return f"Mode: **{mode_label(mode, lang)}**"
    return f"Chế độ: **{mode_label(mode, lang)}**"


def mode_usage_text(lang: str = "vi") -> str:
    if _en(lang):
        return "Usage: /mode [gemini|qa]"
    return "Cách dùng: /mode [gemini|qa]"


def chat_in_progress_text(mode: str, lang: str = "vi") -> str:
    if mode == "gemini":
        return "Gemini is replying..." if _en(lang) else "Gemini đang trả lời..."
    return "Querying Supabase..." if _en(lang) else "Đang truy vấn Supabase..."


def busy_text(lang: str = "vi") -> str:
    if _en(lang):
        return "Still working on your previous message. Please wait for the reply."
    return "Đang xử lý tin nhắn trước. Vui lòng chờ phản hồi."


def new_chat_text(lang: str = "vi") -> str:
    if _en(lang):
        return "Started a new conversation. Previous history was cleared."
    return "Đã bắt đầu cuộc trò chuyện mới. Lịch sử trước đã được xoá."


def chat_failed_text(detail: str, lang: str = "vi") -> str:
    if _en(lang):
        return f"Failed to answer: {detail}"
    return f"Không thể trả lời: {detail}"


def runtime_status_text(status: dict[str, str], lang: str = "vi") -> str:
    mode = mode_label(status.get("mode", "qa"), lang)
    if _en(lang):
        return (
            "Runtime status\n"
            f"- Instance: {status.get('instance_id', '-')}\n"
            f"- Mode: **{mode}**\n"
            f"- QA endpoint: {status.get('qa_endpoint', '-')}\n"
            f"- Gemini model: {status.get('gemini_model', '-')} (key: {status.get('gemini_ready', 'no')})\n"
            f"- Messages in this chat: {status.get('messages', '0')}"
        )
    return (
        "Trạng thái\n"
        f"- Instance: {status.get('instance_id', '-')}\n"
        f"- Chế độ: **{mode}**\n"
        f"- QA endpoint: {status.get('qa_endpoint', '-')}\n"
        f"- Gemini model: {status.get('gemini_model', '-')} (key: {status.get('gemini_ready', 'no')})\n"
        f"- Số tin nhắn trong cuộc trò chuyện: {status.get('messages', '0')}"
    )

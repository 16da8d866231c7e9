# User-facing texts (Telegram Markdown)

INVALID_TOKEN = (
    "⚠️ *Invalid or missing screening token.*\n\n"
    "Please use the *Telegram link* that was sent to you in the application confirmation email.\n\n"
    "If you believe this is an error, contact our support team."
)

NO_TOKEN = (
    "⚠️ *No screening token found.*\n\n"
    "To start your screening, please open the *Telegram link* from your application email — "
    "it contains a unique token that identifies you.\n\n"
    "If you haven't received the email, check your spam folder."
)

NO_ACTIVE_SESSION = (
    "🔄 *No active session found.*\n\n"
    "Please open the *Telegram link* from your application email to start your screening."
)

SESSION_EXPIRED = (
    "⚠️ Your session has expired or was not found.\n\n"
    "Please use the *Telegram link* from your application email to start a new screening."
)

USE_BUTTONS = "👆 Please use the *buttons* to answer the current question."

START_HINT = (
    "👋 To start your SpanishVIP teacher screening, please use the *Telegram link* "
    "from your application email.\n\nType /help for more information."
)

TOO_FAST_MESSAGE = "⏳ You're sending messages too quickly. Please wait a moment before trying again."
TOO_FAST_BUTTON = "⏳ You're clicking too quickly. Please wait a moment before continuing."

INVALID_NUMBER = "🔢 Please reply with a valid number between {low} and {high}."

HELP = (
    "*SpanishVIP Teacher Screening Bot* 🤖\n\n"
    "This bot guides teacher applicants through a short screening to join the SpanishVIP team.\n\n"
    "*How it works:*\n"
    "1. You apply through our form and receive a unique Telegram link by email\n"
    "2. Click the link to open this bot and start the screening\n"
    "3. Answer {count} short questions\n"
    "4. Our team reviews your answers and follows up with next steps\n\n"
    "*Commands:*\n"
    "/start — Begin screening (requires your unique link from the email)\n"
    "/restart — Restart the screening using your current session\n"
    "/help — Show this help message\n\n"
    "Need help? Contact us through the SpanishVIP website."
)


def welcome(first_name: str, count: int) -> str:
    return (
        f"👋 Hi *{first_name or 'there'}*! Welcome to the SpanishVIP teacher screening.\n\n"
        f"We have *{count} quick questions* to see if you're a great fit for our team. "
        "It only takes about a minute!\n\n"
        "_Let's get started:_"
    )


def passed(coordinator_link: str) -> str:
    text = (
        "🎉 *Congratulations!* You've passed the initial screening.\n\n"
        "Our team will review your application and reach out soon."
    )
    if coordinator_link:
        text += "\n\nIn the meantime, you can also connect directly with our coordinator:\n" + coordinator_link
    return text


def failed(reason: str) -> str:
    return (
        "Thank you for your interest in SpanishVIP! 🙏\n\n"
        "Based on your answers, we're not able to move forward at this time.\n\n"
        f"_Reason: {reason}_\n\n"
        "We appreciate you taking the time and wish you all the best in your teaching career!"
    )

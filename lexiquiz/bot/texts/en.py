TEXTS_EN: dict[str, str] = {
    "msg.menu.choose_mode": "Choose a training mode:",
    "msg.menu.mode_selected.category": "Mode: {mode}. Choose a word type:",
    "msg.menu.mode_selected.level": "Mode: {mode}. Choose a level:",
    "msg.menu.category_selected": "Word type: {category}. Choose a level:",
    "msg.menu.level_selected": "Selected {category_prefix}{mode}, level {level}.",
    "msg.question.header": "Question {number}/{total}",
    "msg.question.translate": "Translate: {prompt}",
    "msg.question.text_topic": "Read the text and choose its topic:",
    "msg.result.text": "Text:",
    "msg.result.fact": "Text and question:",
    "msg.result.your_answer": "Your answer: {answer}",
    "msg.result.correct_answer": "Correct answer: {correct}",
    "msg.result.correct_topic": "Correct topic: {correct}",
    "msg.result.correct": "✅ Correct",
    "msg.result.wrong": "❌ Wrong",
    "msg.session.summary": "Session finished. Correct: {correct} of {total}.",
    "msg.session.not_found": "Session not found. Start again with /start.",
    "msg.session.question_inactive": "This question is no longer active. Start again with /start.",
    "msg.session.no_active": "No active writing session. Start one with /start.",
    "msg.pool.insufficient": "Not enough words for a training session.",
    "msg.question.build_failed": "Could not build a question.",
    "msg.command.unsupported": "Only /start is supported for now.",
    "msg.answer.empty": "Send the word as text.",
    "msg.answer.invalid": "That answer option does not exist.",
}

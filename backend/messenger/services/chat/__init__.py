"""Direct messaging: message store, chat directory and chat list summaries."""

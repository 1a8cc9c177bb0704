"""HTTP server helpers: messages, errors, responses and CORS middleware."""
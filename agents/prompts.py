FORMATTING_RULES = (
    "FORMATTING REQUIREMENTS:\n"
    "- Use proper markdown formatting in your response\n"
    "- Always use single backticks for:\n"
    "  - All code elements: `variable_name`, `function()`, `SELECT`\n"
    "  - All technical values: `192.168.1.1`, `64`, `443`, `8080`\n"
    "  - All database elements: `users` table, `id` column\n"
    "  - Any technical terms or keywords\n"
    "- Only use triple backticks for multi-line code blocks with a language specified:\n"
    "  ```sql\n"
    "  SELECT * FROM users WHERE id = 1;\n"
    "  ```\n"
    "- Do not format regular text or sentences with backticks\n"
)

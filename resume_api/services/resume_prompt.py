def build_resume_prompt(resume_text: str) -> str:
    return f"""
Parse this resume into strict JSON with:
- personal_info (name, email, phone, linkedin, languages)
- education [{{ degree, university, year }}]
- work_experience [{{ job_title, company, duration, responsibilities[] }}]
- skills (technical[], soft[])
- certifications [{{ name, issuer, year }}]
- projects [{{ title, technology, time_period }}]

Automatic spam detection: decide whether this is a genuine resume. Treat it as spam when
required fields are missing, the content is gibberish, the formatting is fake, or fields
contain placeholder patterns (e.g. "John Doe", "example@example.com", "123-456-7890").
Check every field that is present with proper validation:
- start and end years must be valid years
- the email address must be a valid email address
- the phone number must be in a correct format for the country/address the candidate lives in

Return ONLY a valid JSON object. No markdown, no code fences, no backticks, no quotes
around the object, no explanations, no improvement suggestions and no parsed lines.
JSON keys are always in double quotes.
If the resume is spam set "spam": true, otherwise "spam": false, inside the object.

Resume Text:
{resume_text}
"""

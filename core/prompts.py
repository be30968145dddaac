# core/prompts.py
EXTRACTION_PROMPT = (
    "Please list all the ingredients shown on this food package image. "
    "If the ingredients are not in English, translate them to English. "
    "Return the list of ingredients in English, followed by the original text "
    "in parentheses if it was translated."
)

ANALYSIS_PROMPT_TMPL = """
Analyze the following list of ingredients and identify any that are generally considered unhealthy or concerning from a nutritional standpoint. Consider factors such as added sugars, trans fats, artificial additives, excessive sodium, and other potentially harmful ingredients. Provide a brief explanation for each identified unhealthy ingredient.

Ingredients: {{ ingredients }}

Additionally, check if any of the following predefined unhealthy ingredients are present: {{ unhealthy_list }}

Format your response as follows, and make the title font in Bold:
Unhealthy Ingredients Found In the Curated List:
[List the ingredients found from the predefined list]

Potentially Unhealthy Ingredients:
1. [Ingredient Name]: [Brief explanation]
2. [Ingredient Name]: [Brief explanation]
...

Additional Comments:
[Any additional observations or comments about the overall healthiness of the product]
"""

"""Prompt templates sent to the image model."""

REMOVE_BACKGROUND_PROMPT = (
    "Analyze the image and identify the main subject. Create a black and white mask for this "
    "subject. The subject must be solid white, and the background must be solid black. "
    "The output must be a PNG file."
)

CREATE_CUTOUT_PROMPT = (
    "Analyze the image and identify the main subject. Create a black and white mask. The mask "
    "must represent the subject with a thick, irregular white border around it, as if cut out "
    "of a magazine with scissors. The subject and its border must be solid white, and everything "
    "else must be solid black. The output MUST be a PNG file."
)

REFINE_MASK_PROMPT = (
    "You are an expert image processor. You will be given a black and white mask image. "
    "Identify the main white subject(s). Within the external contour of each white subject, fill "
    "any black areas or holes with pure solid white (#FFFFFF) so the subject becomes one solid "
    "white silhouette with no internal details. The background must remain pure solid black "
    "(#000000). The output MUST be a PNG file."
)


def outfit_composite_prompt(aspect_ratio: str, categories: list[str]) -> str:
    listed = ", ".join(categories)
    return (
        "Create a single, cohesive 'flat lay' image composition featuring these clothing items "
        f"({listed}). Arrange them artfully on a clean, neutral, slightly textured background such "
        "as light wood or linen. The image should look like a professional shot for a fashion blog "
        f"or social media. The final image must have an aspect ratio of {aspect_ratio}. Do not "
        "include any text, logos, or human models."
    )


def suggest_outfits_prompt(wardrobe: list[dict]) -> str:
    lines = []
    for index, item in enumerate(wardrobe, start=1):
        tags = ", ".join(item.get("tags") or []) or "none"
        description = item.get("description") or "No description provided."
        lines.append(
            f"- Photo {index}. Name: {item['name']}; Category: {item['category']}; "
            f"Tags: {tags}; Description: {description}"
        )
    wardrobe_text = "\n".join(lines)
    return (
        "You are a personal stylist. Given the user's wardrobe, suggest 3 different outfits. Use "
        "the tags (like 'summer', 'work', 'casual') to build stylish, appropriate and cohesive "
        "outfits; for example do not mix 'winter' and 'summer' items. Only use items listed below, "
        "referring to them by their exact name.\n\n"
        f"Wardrobe (photos attached in the same order):\n{wardrobe_text}\n\n"
        "Respond with JSON of the form "
        '{"outfitSuggestions": [{"description": str, "items": [{"name": str, "category": str}]}]}.'
    )


__all__ = [
    "CREATE_CUTOUT_PROMPT",
    "REFINE_MASK_PROMPT",
    "REMOVE_BACKGROUND_PROMPT",
    "outfit_composite_prompt",
    "suggest_outfits_prompt",
]

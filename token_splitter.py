# token_splitter.py

import re
from typing import List

# Separatori: virgole e/o spazi (newline inclusi)
_SEPARATORS = re.compile(r"[,\s]+")


def split_tokens(text: str) -> List[str]:
    """Spezza il testo su virgole/spazi, fa strip e scarta i token vuoti."""
    return [tok for tok in (part.strip() for part in _SEPARATORS.split(text)) if tok]

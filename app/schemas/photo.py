from typing import List

from pydantic import BaseModel


class PhotoBatchOut(BaseModel):
    images: List[str]
    errors: List[str]

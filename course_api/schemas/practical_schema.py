from typing import Optional

from pydantic import BaseModel, Field


class PracticalInfoUpdate(BaseModel):
    address: Optional[str] = None
    google_maps_url: Optional[str] = None
    train_info: Optional[str] = None
    car_info: Optional[str] = None
    parking_info: Optional[str] = None
    facilities: Optional[str] = None


class PracticalInfoOut(PracticalInfoUpdate):
    id: str

    model_config = {"from_attributes": True}


class FaqItemBase(BaseModel):
    question: str = Field(..., min_length=1, max_length=500)
    answer: str = Field(..., min_length=1)
    category: Optional[str] = None
    order_index: int = 0


class FaqItemCreate(FaqItemBase):
    pass


class FaqItemUpdate(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    category: Optional[str] = None
    order_index: Optional[int] = None


class FaqItemOut(FaqItemBase):
    id: str

    model_config = {"from_attributes": True}

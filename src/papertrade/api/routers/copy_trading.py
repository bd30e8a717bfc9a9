"""Copy trading endpoints: settings and copied trade history."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_copy_settings_service
from papertrade.api.schemas import (
    CopySettingCreateRequest,
    CopySettingUpdateRequest,
    CopySettingResponse,
    CopiedTradeResponse,
)
from papertrade.services import CopySettingsService, CopySettingCreate, CopySettingUpdate

router = APIRouter(prefix="/accounts/{account_id}", tags=["copy-trading"])


@router.post("/copy-settings", response_model=CopySettingResponse, status_code=201)
def create_copy_setting(
    account_id: str,
    data: CopySettingCreateRequest,
    service: CopySettingsService = Depends(get_copy_settings_service),
) -> CopySettingResponse:
    """Start copying a trader."""
    setting = service.create_setting(
        account_id,
        CopySettingCreate(
            followed_trader_id=data.followed_trader_id,
            copy_amount_cash=data.copy_amount_cash,
            max_position_size_cash=data.max_position_size_cash,
            risk_level=data.risk_level,
            enabled=data.enabled,
        ),
    )
    return CopySettingResponse.model_validate(setting)


@router.get("/copy-settings", response_model=list[CopySettingResponse])
def list_copy_settings(
    account_id: str,
    service: CopySettingsService = Depends(get_copy_settings_service),
) -> list[CopySettingResponse]:
    """All copy settings owned by this account."""
    return [CopySettingResponse.model_validate(s) for s in service.list_settings(account_id)]


@router.put("/copy-settings/{setting_id}", response_model=CopySettingResponse)
def update_copy_setting(
    account_id: str,
    setting_id: str,
    data: CopySettingUpdateRequest,
    service: CopySettingsService = Depends(get_copy_settings_service),
) -> CopySettingResponse:
    """Change amounts, risk level, or enable/disable a setting."""
    setting = service.update_setting(
        account_id,
        setting_id,
        CopySettingUpdate(
            copy_amount_cash=data.copy_amount_cash,
            max_position_size_cash=data.max_position_size_cash,
            risk_level=data.risk_level,
            enabled=data.enabled,
        ),
    )
    return CopySettingResponse.model_validate(setting)


@router.get("/copied-trades", response_model=list[CopiedTradeResponse])
def list_copied_trades(
    account_id: str,
    service: CopySettingsService = Depends(get_copy_settings_service),
) -> list[CopiedTradeResponse]:
    """Copy trade outcomes for this follower, newest first."""
    return [CopiedTradeResponse.model_validate(c) for c in service.list_copied_trades(account_id)]

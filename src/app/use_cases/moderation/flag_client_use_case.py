"""
Flag Client Use Case

Records an enforcement flag against a client, token or IP address.
"""

from typing import Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.moderation.dtos import FlagClientCommand, FlagClientResponse
from src.app.use_cases.moderation.flagging import record_flag, validate_flag_command


class FlagClientUseCase:
    """
    Use case for flagging a client, token or IP address.

    Business Rules:
    - At least one of client_id / token_id / ip_address is required
    - Validation happens before anything is written
    - expires_at absent means the flag is permanent
    - A client_flagged audit entry targets the client id, else the token id,
      else the IP address, and carries flag id, type, severity and reason
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        command: FlagClientCommand,
        flagged_by: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[FlagClientResponse]:
        """
        Execute flag client use case.

        Args:
            command: Flag request
            flagged_by: Moderator performing the action
            ip_address: Moderator's request IP (audit only)
            user_agent: Moderator's user agent (audit only)

        Returns:
            Result with the new flag id, or Error
        """
        error = validate_flag_command(command)
        if error:
            return Return.err(error)

        async with self.uow:
            flag = await record_flag(
                self.uow, command, flagged_by, ip_address=ip_address, user_agent=user_agent
            )
            await self.uow.commit()

            return Return.ok(
                FlagClientResponse(
                    flag_id=str(flag.flag_id), message="Client flagged successfully"
                )
            )

from abc import ABC, abstractmethod


class EmailServiceBase(ABC):
    @abstractmethod
    async def send_invitation(
        self,
        to_address: str,
        guest_name: str,
        event_title: str,
        event_date: str,
        event_location: str,
        host_name: str,
        invitation_url: str,
    ) -> None:
        pass

    @abstractmethod
    async def send_verification(
        self,
        to_address: str,
        user_name: str,
        verification_url: str,
    ) -> None:
        pass

    @abstractmethod
    async def send_contact_message(
        self,
        to_address: str,
        sender_name: str,
        sender_email: str,
        subject: str,
        message: str,
        inquiry_type: str,
    ) -> None:
        pass

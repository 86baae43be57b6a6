"""TicketDesk capacity planning API"""

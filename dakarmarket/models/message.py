# dakarmarket/models/message.py
from . import db, new_id, utcnow


class Message(db.Model):
    __tablename__ = "messages"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    from_user = db.Column(db.String(36), db.ForeignKey("profiles.id"), nullable=False, index=True)
    to_user = db.Column(db.String(36), db.ForeignKey("profiles.id"), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    # único campo mutável da mensagem
    read = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self):
        return f"<Message id={self.id} {self.from_user}->{self.to_user} read={self.read}>"

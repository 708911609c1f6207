from flask import Blueprint, render_template

from tasktracker import handlers

main = Blueprint('main', __name__)


@main.route('/')
def index():
    tasks = [task.to_dict() for task in handlers.get_tasks()]
    return render_template('main/index.html', tasks=tasks)

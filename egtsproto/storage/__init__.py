"""Export records, the storage repository, and its Redis, MySQL, RabbitMQ and logging storages."""